"""リダイレクト先HTMLから座標を探すパーサー"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from ....shared.logging.config import get_logger

logger = get_logger(__name__)

# 埋め込みJSONの "center":{"lat":..,"lng":..}
CENTER_JSON_PATTERN = re.compile(
    r'"center"\s*:\s*\{\s*"lat"\s*:\s*(-?\d+\.\d+)\s*,\s*"lng"\s*:\s*(-?\d+\.\d+)\s*\}'
)

# 静的地図画像URLの center=lat,lng
STATIC_MAP_PATTERN = re.compile(
    r"maps\.googleapis\.com/maps/api/staticmap\?(?:[^\"'\s]*?&(?:amp;)?)?center=(-?\d+\.\d+)(?:,|%2C)(-?\d+\.\d+)",
    re.IGNORECASE,
)

# 静的地図を参照しうる属性
IMAGE_META_SELECTORS = (
    'meta[property="og:image"]',
    'meta[itemprop="image"]',
    'meta[name="twitter:image"]',
)


class HtmlCoordinateParser:
    """
    地図ページのHTMLから座標文字列を抽出

    ページ構造の変更に弱いベストエフォートのヒューリスティック。
    見つからない場合はNoneを返す。
    """

    def parse(self, html: str) -> Optional[tuple[str, str]]:
        """
        HTMLから(緯度, 経度)の文字列を抽出

        Args:
            html: HTML文字列

        Returns:
            Optional[tuple[str, str]]: 見つかった座標（見つからない場合はNone）
        """
        if not html:
            return None

        coords = self.extract_center_json(html)
        if coords:
            logger.debug(f"Coordinates found in embedded JSON: {coords}")
            return coords

        coords = self.extract_static_map(html)
        if coords:
            logger.debug(f"Coordinates found in static map reference: {coords}")
            return coords

        return None

    def extract_center_json(self, html: str) -> Optional[tuple[str, str]]:
        """埋め込みJSONの center フィールドから抽出"""
        match = CENTER_JSON_PATTERN.search(html)
        if match:
            return (match.group(1), match.group(2))
        return None

    def extract_static_map(self, html: str) -> Optional[tuple[str, str]]:
        """静的地図画像URLの center パラメータから抽出"""
        soup = BeautifulSoup(html, "html.parser")

        candidates: list[str] = []
        for selector in IMAGE_META_SELECTORS:
            for element in soup.select(selector):
                content = element.get("content")
                if isinstance(content, str):
                    candidates.append(content)
        for img in soup.find_all("img"):
            src = img.get("src")
            if isinstance(src, str):
                candidates.append(src)

        for candidate in candidates:
            match = STATIC_MAP_PATTERN.search(candidate)
            if match:
                return (match.group(1), match.group(2))

        # スクリプト内の文字列など、タグ属性以外に埋め込まれている場合
        match = STATIC_MAP_PATTERN.search(html)
        if match:
            return (match.group(1), match.group(2))

        return None
