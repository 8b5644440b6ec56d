"""テスト共通のフィクスチャ（ネットワークを使わないHTTPクライアント）"""
from typing import Any, Optional, Union

import pytest

from src.shared.exceptions.errors import HTTPError


class FakeResponse:
    """requests.Response の代わりに使う最小限のレスポンス"""

    def __init__(
        self,
        status_code: int = 200,
        headers: Optional[dict[str, str]] = None,
        text: str = "",
        json_data: Any = None,
        url: str = "",
        history: Optional[list["FakeResponse"]] = None,
    ) -> None:
        self.status_code = status_code
        self.headers = headers or {}
        self.text = text
        self._json_data = json_data
        self.url = url
        self.history = history or []

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON body")
        return self._json_data


class FakeHTTPClient:
    """URLごとに用意したレスポンス（または例外）を返すHTTPクライアント"""

    def __init__(self, routes: dict[str, Union[FakeResponse, Exception]]) -> None:
        self.routes = routes
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        allow_redirects: bool = True,
        raise_for_status: bool = True,
        timeout: Optional[float] = None,
    ) -> FakeResponse:
        self.calls.append(
            {
                "url": url,
                "params": params,
                "allow_redirects": allow_redirects,
                "raise_for_status": raise_for_status,
                "timeout": timeout,
            }
        )
        route = self.routes.get(url)
        if route is None:
            raise HTTPError(f"Failed to GET {url}: connection refused")
        if isinstance(route, Exception):
            raise route
        if raise_for_status and route.status_code >= 400:
            raise HTTPError(f"Failed to GET {url}: {route.status_code}")
        return route

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse


@pytest.fixture
def fake_http_client() -> type[FakeHTTPClient]:
    return FakeHTTPClient
