"""リンクリゾルバー（同期・ネットワーク不要）"""

from typing import Optional, Sequence

from ..domain.models import (
    Coordinate,
    ExpansionNeeded,
    ExtractionAttemptResult,
    Resolved,
    Unresolved,
)
from ..domain.patterns import MANUAL_ENTRY_PATTERN, PATTERN_RULES, SHORT_LINK_MARKERS
from ..strategies.base import ExtractionStrategy
from ..strategies.regex_strategy import RegexStrategy
from ....shared.exceptions.errors import ValidationError
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text, truncate_text

logger = get_logger(__name__)


def default_strategies() -> tuple[ExtractionStrategy, ...]:
    """パターン表から優先順のストラテジー一覧を作成"""
    return tuple(RegexStrategy(rule) for rule in PATTERN_RULES)


class LinkResolver:
    """
    貼り付けられた文字列から座標を抽出する

    ストラテジーを優先順に試し、最初に有効な座標を返したものを採用する。
    状態を持たないため、同じインスタンスを並行して呼び出してもよい。
    """

    def __init__(
        self,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
        short_link_markers: Sequence[str] = SHORT_LINK_MARKERS,
    ) -> None:
        """
        Args:
            strategies: 優先順のストラテジー（Noneの場合はデフォルトのパターン表）
            short_link_markers: 短縮リンクと判定するホスト文字列
        """
        self.strategies = tuple(strategies) if strategies is not None else default_strategies()
        self.short_link_markers = tuple(short_link_markers)

    def resolve(self, text: Optional[str]) -> ExtractionAttemptResult:
        """
        文字列から座標を抽出

        Args:
            text: URL、座標文字列、または任意のテキスト

        Returns:
            ExtractionAttemptResult: Resolved / ExpansionNeeded / Unresolved
        """
        normalized = normalize_text(text)
        if not normalized:
            return Unresolved(input_text=text or "")

        for strategy in self.strategies:
            coordinate = strategy.attempt(normalized)
            if coordinate is not None:
                logger.debug(f"Resolved by '{strategy.name}': {coordinate}")
                return Resolved(coordinate=coordinate, rule_name=strategy.name)

        if self.is_short_link(normalized):
            logger.debug(f"Short link needs expansion: {truncate_text(normalized)}")
            return ExpansionNeeded(candidate_url=(text or "").strip())

        logger.debug(f"No coordinates found in: {truncate_text(normalized)}")
        return Unresolved(input_text=normalized)

    def is_short_link(self, text: str) -> bool:
        """短縮リンクかどうか"""
        return any(marker in text for marker in self.short_link_markers)


def resolve(text: Optional[str]) -> ExtractionAttemptResult:
    """デフォルトのパターン表で文字列を解決"""
    return _default_resolver.resolve(text)


def parse_manual_coordinates(text: Optional[str]) -> Optional[Coordinate]:
    """
    手入力された「lat,lng」形式の座標を解析

    Args:
        text: 入力文字列（例: "23.5937,78.9629"）

    Returns:
        Optional[Coordinate]: 座標（形式不正または範囲外の場合はNone）
    """
    if not text:
        return None

    match = MANUAL_ENTRY_PATTERN.match(text)
    if not match:
        return None

    try:
        return Coordinate.from_strings(match.group(1), match.group(2))
    except ValidationError as e:
        logger.debug(f"Manual coordinates rejected: {e}")
        return None


_default_resolver = LinkResolver()
