"""地図リンク解決機能のEnum定義"""
from enum import Enum


class FailureReason(str, Enum):
    """座標解決に失敗した理由"""

    UNRESOLVED = "unresolved"  # どのパターンにも一致せず、短縮リンクでもない
    NO_REDIRECT = "no_redirect"  # 短縮リンクがリダイレクトを返さなかった
    NO_COORDINATES = "no_coordinates"  # リダイレクト先はわかったが座標が見つからない
    SERVICE_UNAVAILABLE = "service_unavailable"  # 展開サービスに到達できない

    @property
    def display_message(self) -> str:
        """UI向けの案内文"""
        messages = {
            FailureReason.UNRESOLVED: "Could not extract coordinates. Please enter them manually.",
            FailureReason.NO_REDIRECT: "This short link did not redirect anywhere. Please enter coordinates manually.",
            FailureReason.NO_COORDINATES: (
                "This short link doesn't expose coordinates. "
                "Try the full map link containing '@lat,lng' instead."
            ),
            FailureReason.SERVICE_UNAVAILABLE: (
                "The link expansion service is unavailable. Please try again or enter coordinates manually."
            ),
        }
        return messages[self]
