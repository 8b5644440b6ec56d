"""地図リンク解決機能のドメインモデル"""
import math
import re
from dataclasses import dataclass
from typing import Optional, Union

from ....shared.exceptions.errors import ValidationError
from .enums import FailureReason

COORDINATE_PRECISION = 6

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


@dataclass(frozen=True)
class Coordinate:
    """
    検証済みの座標（緯度・経度）

    生成時に範囲チェックを行い、小数点以下6桁に丸める。
    範囲外の値を持つインスタンスは存在しない。
    """

    latitude: float  # 緯度
    longitude: float  # 経度

    def __post_init__(self) -> None:
        latitude = float(self.latitude)
        longitude = float(self.longitude)

        if math.isnan(latitude) or math.isnan(longitude):
            raise ValidationError(f"Coordinate must be numeric: ({self.latitude}, {self.longitude})")
        if not LATITUDE_RANGE[0] <= latitude <= LATITUDE_RANGE[1]:
            raise ValidationError(f"Latitude out of range: {latitude}")
        if not LONGITUDE_RANGE[0] <= longitude <= LONGITUDE_RANGE[1]:
            raise ValidationError(f"Longitude out of range: {longitude}")

        # frozen dataclassのため object.__setattr__ で正規化後の値を設定
        object.__setattr__(self, "latitude", round(latitude, COORDINATE_PRECISION))
        object.__setattr__(self, "longitude", round(longitude, COORDINATE_PRECISION))

    @classmethod
    def from_strings(cls, latitude: str, longitude: str) -> "Coordinate":
        """
        文字列の緯度・経度から座標を生成

        Args:
            latitude: 緯度文字列
            longitude: 経度文字列

        Returns:
            Coordinate: 座標

        Raises:
            ValidationError: 数値でない、または範囲外の場合
        """
        try:
            return cls(float(latitude), float(longitude))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Coordinate must be numeric: ({latitude}, {longitude})") from e

    def __repr__(self) -> str:
        return f"Coordinate(lat={self.latitude:.6f}, lng={self.longitude:.6f})"

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.latitude, self.longitude)

    def as_display(self) -> tuple[str, str]:
        """フォーム表示用の小数点以下6桁の文字列"""
        return (f"{self.latitude:.6f}", f"{self.longitude:.6f}")

    def to_maps_url(self) -> str:
        """プレビュー用のGoogle Maps URL"""
        latitude, longitude = self.as_display()
        return f"https://www.google.com/maps?q={latitude},{longitude}"


@dataclass(frozen=True)
class PatternRule:
    """座標抽出用の正規表現ルール（優先順位はリスト内の位置で決まる）"""

    name: str
    regex: re.Pattern[str]
    lat_group: int = 1
    lng_group: int = 2


@dataclass(frozen=True)
class Resolved:
    """座標の抽出に成功"""

    coordinate: Coordinate
    rule_name: Optional[str] = None


@dataclass(frozen=True)
class ExpansionNeeded:
    """短縮リンクのため展開が必要"""

    candidate_url: str


@dataclass(frozen=True)
class Unresolved:
    """座標を抽出できず、展開も適用できない"""

    input_text: str = ""


ExtractionAttemptResult = Union[Resolved, ExpansionNeeded, Unresolved]


@dataclass(frozen=True)
class ExpansionOutcome:
    """
    短縮リンク展開の結果

    expanded_url と direct_coordinate のどちらも無い場合は展開失敗を表す。
    error には展開サービスが返したメッセージを保持する。
    """

    expanded_url: Optional[str] = None
    direct_coordinate: Optional[Coordinate] = None
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """展開結果が何も得られなかったか"""
        return self.expanded_url is None and self.direct_coordinate is None


@dataclass(frozen=True)
class ResolutionFailure:
    """座標解決の失敗（呼び出し側がUI表示を決める）"""

    reason: FailureReason
    message: str
    expanded_url: Optional[str] = None

    @property
    def display_message(self) -> str:
        """UI向けの案内文"""
        return self.reason.display_message


ResolutionResult = Union[Coordinate, ResolutionFailure]
