"""正規表現による座標抽出ストラテジー"""

from typing import Optional

from ..domain.models import Coordinate, PatternRule
from ....shared.exceptions.errors import ValidationError
from ....shared.logging.config import get_logger
from .base import ExtractionStrategy

logger = get_logger(__name__)


class RegexStrategy(ExtractionStrategy):
    """PatternRule 1件に対応するストラテジー"""

    def __init__(self, rule: PatternRule) -> None:
        """
        Args:
            rule: 抽出パターン
        """
        self.rule = rule
        self.name = rule.name

    def attempt(self, text: str) -> Optional[Coordinate]:
        match = self.rule.regex.search(text)
        if not match:
            return None

        latitude = match.group(self.rule.lat_group)
        longitude = match.group(self.rule.lng_group)

        try:
            return Coordinate.from_strings(latitude, longitude)
        except ValidationError as e:
            # 座標以外の数値を拾った可能性があるため、不一致として扱う
            logger.debug(f"Rule '{self.name}' matched but rejected: {e}")
            return None

    def __repr__(self) -> str:
        return f"RegexStrategy(name={self.name!r})"
