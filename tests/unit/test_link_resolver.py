"""リンクリゾルバーのテスト"""

from typing import Optional

import pytest

from src.features.maps_link.domain.models import (
    Coordinate,
    ExpansionNeeded,
    Resolved,
    Unresolved,
)
from src.features.maps_link.domain.patterns import PATTERN_RULES
from src.features.maps_link.services.link_resolver import (
    LinkResolver,
    parse_manual_coordinates,
    resolve,
)
from src.features.maps_link.strategies.base import ExtractionStrategy


def test_resolve_at_pattern() -> None:
    """@lat,lng 形式のURL"""
    result = resolve("https://www.google.com/maps/@23.5937,78.9629,15z")
    assert isinstance(result, Resolved)
    assert result.coordinate == Coordinate(23.5937, 78.9629)
    assert result.coordinate.as_display() == ("23.593700", "78.962900")
    assert result.rule_name == "at"


def test_resolve_q_parameter() -> None:
    """?q=lat,lng 形式のURL"""
    result = resolve("https://www.google.com/maps?q=28.6139,77.2090")
    assert isinstance(result, Resolved)
    assert result.coordinate.as_display() == ("28.613900", "77.209000")


def test_resolve_bare_coordinates() -> None:
    """座標文字列のみ"""
    result = resolve("19.0760,72.8777")
    assert isinstance(result, Resolved)
    assert result.coordinate.as_display() == ("19.076000", "72.877700")
    assert result.rule_name == "bare"


@pytest.mark.parametrize(
    "text,rule_name,expected",
    [
        ("https://www.google.com/maps/@-33.8688,151.2093,12z", "at", (-33.8688, 151.2093)),
        ("https://maps.google.com/?q=12.5,-70.25&z=10", "q", (12.5, -70.25)),
        ("https://maps.google.com/?z=10&ll=40.7128,-74.006", "ll", (40.7128, -74.006)),
        ("https://www.google.com/maps/place/48.8584,2.2945", "place", (48.8584, 2.2945)),
        ("https://maps.google.com/maps?center=35.6762,139.6503&zoom=9", "center", (35.6762, 139.6503)),
        ("https://maps.google.com/maps?saddr=51.5074,-0.1278", "saddr", (51.5074, -0.1278)),
        ("https://maps.google.com/maps?saddr=Home&daddr=52.52,13.405", "daddr", (52.52, 13.405)),
        ("  -1.2921 , 36.8219  ", "bare", (-1.2921, 36.8219)),
    ],
)
def test_resolve_each_pattern(text: str, rule_name: str, expected: tuple[float, float]) -> None:
    """優先順位ごとのパターン"""
    result = resolve(text)
    assert isinstance(result, Resolved)
    assert result.rule_name == rule_name
    assert result.coordinate.to_tuple() == expected


def test_resolve_first_match_wins() -> None:
    """複数のパターンに一致する場合は優先度の高いものを採用"""
    url = "https://www.google.com/maps/place/Foo/@10.5,20.5,17z?q=30.5,40.5"
    result = resolve(url)
    assert isinstance(result, Resolved)
    assert result.rule_name == "at"
    assert result.coordinate.to_tuple() == (10.5, 20.5)


def test_resolve_out_of_range_falls_through_to_next_rule() -> None:
    """範囲外の一致は無視して次のパターンへ"""
    url = "https://www.google.com/maps/@95.0,78.9629,15z?q=28.6139,77.2090"
    result = resolve(url)
    assert isinstance(result, Resolved)
    assert result.rule_name == "q"
    assert result.coordinate.to_tuple() == (28.6139, 77.209)


@pytest.mark.parametrize(
    "text",
    [
        "https://www.google.com/maps/@95.0,78.9629,15z",
        "95.0,78.9629",
        "https://www.google.com/maps?q=12.0,200.0",
    ],
)
def test_resolve_out_of_range_only_is_unresolved(text: str) -> None:
    """範囲外の一致しか無い場合は未解決"""
    assert isinstance(resolve(text), Unresolved)


def test_resolve_bare_pattern_is_anchored() -> None:
    """URLの一部に含まれる数値ペアには一致しない"""
    result = resolve("https://example.com/path/19.0760,72.8777/other")
    assert isinstance(result, Unresolved)


@pytest.mark.parametrize(
    "text",
    [
        "https://maps.app.goo.gl/AbCdEf123",
        "https://goo.gl/maps/XyZ987",
        "  https://maps.app.goo.gl/AbCdEf123\n",
    ],
)
def test_resolve_short_link_needs_expansion(text: str) -> None:
    """短縮リンクは展開が必要"""
    result = resolve(text)
    assert isinstance(result, ExpansionNeeded)
    assert result.candidate_url == text.strip()


def test_resolve_short_link_with_coordinates_is_resolved() -> None:
    """座標を含む場合は短縮リンクでも展開しない"""
    result = resolve("https://maps.app.goo.gl/AbC?q=1.5,2.5")
    assert isinstance(result, Resolved)


@pytest.mark.parametrize(
    "text",
    [
        "",
        None,
        "   ",
        "hello world",
        "https://www.google.com/maps/place/Jharia+Coalfield",
        "https://example.com/?q=abc",
    ],
)
def test_resolve_unresolved(text: Optional[str]) -> None:
    """座標を含まない入力"""
    assert isinstance(resolve(text), Unresolved)


def test_resolve_normalizes_full_width_characters() -> None:
    """全角カンマや全角スペースを含む貼り付け"""
    result = resolve("　19.0760，72.8777　")
    assert isinstance(result, Resolved)
    assert result.coordinate.to_tuple() == (19.076, 72.8777)


def test_resolve_encoded_comma_in_query() -> None:
    """エンコード済みカンマ"""
    result = resolve("https://www.google.com/maps/search/?api=1&q=23.75%2C86.42")
    assert isinstance(result, Resolved)
    assert result.coordinate.to_tuple() == (23.75, 86.42)


@pytest.mark.parametrize(
    "latitude,longitude",
    [
        (23.5937, 78.9629),
        (-89.999999, 179.999999),
        (0.123456789, -0.987654321),
        (45.0, -120.5),
        (-12.3456, 98.7654),
    ],
)
def test_resolve_round_trip(latitude: float, longitude: float) -> None:
    """URLに埋め込んだ座標が6桁に丸められて戻る"""
    for template in (
        "https://www.google.com/maps/@{lat},{lng},15z",
        "https://www.google.com/maps?q={lat},{lng}",
        "{lat},{lng}",
    ):
        result = resolve(template.format(lat=latitude, lng=longitude))
        assert isinstance(result, Resolved)
        assert result.coordinate.to_tuple() == (round(latitude, 6), round(longitude, 6))


def test_resolve_is_idempotent() -> None:
    """同じ入力は同じ結果"""
    resolver = LinkResolver()
    inputs = [
        "https://www.google.com/maps/@23.5937,78.9629,15z",
        "https://maps.app.goo.gl/AbCdEf123",
        "not a link",
    ]
    for text in inputs:
        assert resolver.resolve(text) == resolver.resolve(text)
    assert len(resolver.strategies) == len(PATTERN_RULES)


def test_resolver_accepts_custom_strategies() -> None:
    """独自ストラテジーを差し込める"""

    class FixedStrategy(ExtractionStrategy):
        name = "fixed"

        def attempt(self, text: str) -> Optional[Coordinate]:
            return Coordinate(1.0, 2.0) if text == "mine" else None

    resolver = LinkResolver(strategies=[FixedStrategy()])
    result = resolver.resolve("mine")
    assert isinstance(result, Resolved)
    assert result.rule_name == "fixed"
    assert isinstance(resolver.resolve("19.0760,72.8777"), Unresolved)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("23.5937,78.9629", (23.5937, 78.9629)),
        ("  -23.5 ,  -78.25 ", (-23.5, -78.25)),
        ("23.5937, 78.9629\n", (23.5937, 78.9629)),
    ],
)
def test_parse_manual_coordinates(text: str, expected: tuple[float, float]) -> None:
    """手入力の座標"""
    coordinate = parse_manual_coordinates(text)
    assert coordinate is not None
    assert coordinate.to_tuple() == expected


@pytest.mark.parametrize(
    "text",
    [None, "", "23.5937", "23.5937;78.9629", "91.0,10.0", "10.0,-180.1", "abc,def"],
)
def test_parse_manual_coordinates_invalid(text: Optional[str]) -> None:
    """形式不正または範囲外"""
    assert parse_manual_coordinates(text) is None


def test_short_link_candidate_keeps_original_text() -> None:
    """展開候補は前後の空白だけを除いた元の入力"""
    text = "\thttps://maps.app.goo.gl/AbC?g_st=ic  share \n"
    result = resolve(text)
    assert isinstance(result, ExpansionNeeded)
    assert result.candidate_url == "https://maps.app.goo.gl/AbC?g_st=ic  share"
