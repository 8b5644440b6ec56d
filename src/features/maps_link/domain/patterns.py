"""座標抽出パターン表

優先度の高い順に並べる。汎用的な「lat,lng」単体パターンは、URLの一部に
誤って一致しないよう最後に置き、入力全体に対してアンカーする。
"""
import re

from .models import PatternRule

# 小数（負号あり可）
NUMBER = r"(-?\d+(?:\.\d+)?)"

# クエリパラメータではエンコード済みのカンマ（%2C）も許容
QUERY_SEPARATOR = r"(?:,|%2[cC])"

AT_PATTERN = re.compile(rf"@{NUMBER},{NUMBER}")

PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule("at", AT_PATTERN),
    PatternRule("q", re.compile(rf"[?&]q={NUMBER}{QUERY_SEPARATOR}{NUMBER}")),
    PatternRule("ll", re.compile(rf"[?&]ll={NUMBER}{QUERY_SEPARATOR}{NUMBER}")),
    PatternRule("place", re.compile(rf"/place/{NUMBER},{NUMBER}")),
    PatternRule("center", re.compile(rf"[?&]center={NUMBER}{QUERY_SEPARATOR}{NUMBER}")),
    PatternRule("saddr", re.compile(rf"[?&]saddr={NUMBER}{QUERY_SEPARATOR}{NUMBER}")),
    PatternRule("daddr", re.compile(rf"[?&]daddr={NUMBER}{QUERY_SEPARATOR}{NUMBER}")),
    PatternRule("bare", re.compile(rf"^{NUMBER}\s*,\s*{NUMBER}$")),
)

# 短縮リンクのホスト
SHORT_LINK_MARKERS: tuple[str, ...] = (
    "maps.app.goo.gl",
    "goo.gl/maps",
)

# 手入力の座標（前後の空白を許容）
MANUAL_ENTRY_PATTERN = re.compile(rf"^\s*{NUMBER}\s*,\s*{NUMBER}\s*$")
