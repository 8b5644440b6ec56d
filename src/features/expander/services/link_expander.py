"""短縮リンク展開サービス"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

from ...maps_link.domain.patterns import AT_PATTERN
from ..parsers.html_coordinate_parser import HtmlCoordinateParser
from ....shared.exceptions.errors import HTTPError, NoRedirectError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)

NO_COORDINATES_MESSAGE = "No coordinates found in URL or HTML"


@dataclass(frozen=True)
class ExpandResult:
    """展開結果（座標は見つかった文字列をそのまま保持）"""

    expanded_url: str
    latitude: Optional[str] = None
    longitude: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_response(self) -> dict[str, str]:
        """APIレスポンス形式に変換"""
        if self.has_coordinates:
            return {
                "expanded": self.expanded_url,
                "lat": self.latitude or "",
                "lng": self.longitude or "",
            }
        return {"expanded": self.expanded_url, "error": NO_COORDINATES_MESSAGE}


class LinkExpander:
    """
    短縮リンクを1ホップだけ展開する

    自動リダイレクトを無効にしてLocationヘッダーのみを読む。
    リダイレクトチェーンの最終地点までは追わない。
    リクエスト間で状態は保持しない。
    """

    def __init__(
        self,
        http_client: Optional[HTTPClient] = None,
        redirect_timeout: float = 10,
        html_timeout: float = 10,
        parser: Optional[HtmlCoordinateParser] = None,
    ) -> None:
        """
        Args:
            http_client: HTTPクライアント
            redirect_timeout: 1ホップ目取得のタイムアウト（秒）
            html_timeout: リダイレクト先HTML取得のタイムアウト（秒）
            parser: HTMLパーサー
        """
        self.http_client = http_client or HTTPClient(timeout=redirect_timeout)
        self.redirect_timeout = redirect_timeout
        self.html_timeout = html_timeout
        self.parser = parser or HtmlCoordinateParser()

    def expand(self, url: str) -> ExpandResult:
        """
        短縮リンクを展開し、可能であれば座標も取得

        Args:
            url: 短縮リンク

        Returns:
            ExpandResult: 展開結果（座標が見つからなくても展開後URLは返す）

        Raises:
            NoRedirectError: Locationヘッダーが無い場合
            HTTPError: 1ホップ目の取得に失敗した場合
        """
        response = self.http_client.get(
            url,
            allow_redirects=False,
            raise_for_status=False,
            timeout=self.redirect_timeout,
        )

        location = response.headers.get("Location")
        if not location:
            logger.info(f"No redirect found for {url} (status={response.status_code})")
            raise NoRedirectError(f"No redirect found for {url}")

        # 相対パスのLocationは元URL基準で絶対URLにする
        location = urljoin(url, location)
        logger.debug(f"Redirect captured: {url} -> {location}")

        match = AT_PATTERN.search(location)
        if match:
            return ExpandResult(
                expanded_url=location,
                latitude=match.group(1),
                longitude=match.group(2),
            )

        coords = self._scrape_html(location)
        if coords:
            latitude, longitude = coords
            return ExpandResult(expanded_url=location, latitude=latitude, longitude=longitude)

        return ExpandResult(expanded_url=location)

    def _scrape_html(self, location: str) -> Optional[tuple[str, str]]:
        """リダイレクト先のHTMLを取得して座標を探す（失敗しても展開後URLは失わない）"""
        try:
            response = self.http_client.get(location, timeout=self.html_timeout)
        except HTTPError as e:
            logger.warning(f"HTML fetch failed for {location}: {e}")
            return None

        return self.parser.parse(response.text)

    def close(self) -> None:
        self.http_client.close()
