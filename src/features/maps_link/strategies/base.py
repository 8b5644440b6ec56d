"""座標抽出ストラテジーの基底クラス"""

from abc import ABC, abstractmethod
from typing import Optional

from ..domain.models import Coordinate


class ExtractionStrategy(ABC):
    """入力文字列から座標を抽出するストラテジーの抽象基底クラス"""

    name: str = "base"

    @abstractmethod
    def attempt(self, text: str) -> Optional[Coordinate]:
        """
        座標の抽出を試みる

        Args:
            text: 正規化済みの入力文字列

        Returns:
            Optional[Coordinate]: 抽出できた座標（一致しない、または範囲外の場合はNone）
        """
        pass
