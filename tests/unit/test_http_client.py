"""HTTPクライアントのテスト（ローカルHTTPサーバーを使用）"""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Iterator

import pytest
import requests

from src.features.expander.services.link_expander import LinkExpander
from src.features.maps_link.providers.direct_redirect_client import DirectRedirectClient
from src.shared.exceptions.errors import HTTPError
from src.shared.http.client import HTTPClient


class MapsStubHandler(BaseHTTPRequestHandler):
    """短縮リンクと地図ページを模したハンドラー"""

    def do_GET(self) -> None:
        path = self.path.split("?")[0]

        if path == "/short":
            self._redirect("/hop2")
        elif path == "/hop2":
            self._redirect("/maps/@23.7957,86.4304,13z")
        elif path.startswith("/maps/") or path == "/final":
            body = f"ua={self.headers.get('User-Agent')}".encode("utf-8")
            self.send_response(200)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        elif path == "/slow":
            time.sleep(1.0)
            self.send_response(200)
            self.send_header("Content-Length", "0")
            self.end_headers()
        else:
            self.send_response(404)
            self.send_header("Content-Length", "0")
            self.end_headers()

    def _redirect(self, location: str) -> None:
        self.send_response(302)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format: str, *args: object) -> None:
        pass


@pytest.fixture(scope="module")
def base_url() -> Iterator[str]:
    """デーモンスレッドで動くローカルHTTPサーバー"""
    server = ThreadingHTTPServer(("127.0.0.1", 0), MapsStubHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield f"http://127.0.0.1:{server.server_address[1]}"

    server.shutdown()
    server.server_close()


def test_get_without_redirects_returns_location(base_url: str) -> None:
    """自動リダイレクト無効時は302とLocationヘッダーをそのまま返す"""
    with HTTPClient() as client:
        response = client.get(f"{base_url}/short", allow_redirects=False, raise_for_status=False)

    assert response.status_code == 302
    assert response.headers["Location"] == "/hop2"
    assert response.history == []


def test_get_follows_redirects_by_default(base_url: str) -> None:
    """デフォルトではリダイレクトを最後まで追従"""
    with HTTPClient(user_agent="TestAgent/1.0") as client:
        response = client.get(f"{base_url}/short")

    assert response.status_code == 200
    assert response.url == f"{base_url}/maps/@23.7957,86.4304,13z"
    assert len(response.history) == 2
    assert response.text == "ua=TestAgent/1.0"


def test_get_not_found_without_raise(base_url: str) -> None:
    """raise_for_status=False なら404でも例外にしない"""
    with HTTPClient() as client:
        response = client.get(f"{base_url}/missing", raise_for_status=False)

    assert response.status_code == 404


def test_get_not_found_raises_http_error(base_url: str) -> None:
    """404はHTTPErrorに変換"""
    with HTTPClient() as client:
        with pytest.raises(HTTPError):
            client.get(f"{base_url}/missing")


@pytest.mark.parametrize("client_timeout,call_timeout", [(0.2, None), (30, 0.2)])
def test_timeout_raises_http_error(base_url: str, client_timeout: float, call_timeout: float) -> None:
    """タイムアウトは通信エラーと同じくHTTPErrorになる"""
    with HTTPClient(timeout=client_timeout) as client:
        with pytest.raises(HTTPError):
            client.get(f"{base_url}/slow", timeout=call_timeout)


def test_connection_error_raises_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """接続エラーはHTTPErrorに変換し、元の例外を保持"""
    client = HTTPClient()

    def refuse(*args: object, **kwargs: object) -> None:
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(client.session, "get", refuse)

    with pytest.raises(HTTPError) as exc_info:
        client.get("http://127.0.0.1:9/expand")
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_link_expander_follows_single_hop(base_url: str) -> None:
    """展開サービスは1ホップ目のLocationのみを採用"""
    expander = LinkExpander(http_client=HTTPClient(timeout=5))
    try:
        result = expander.expand(f"{base_url}/short")
    finally:
        expander.close()

    assert result.expanded_url == f"{base_url}/hop2"
    assert not result.has_coordinates


def test_direct_redirect_client_returns_final_url(base_url: str) -> None:
    """直接取得ではリダイレクト後の最終URLを返す"""
    client = DirectRedirectClient(http_client=HTTPClient(timeout=5))
    try:
        redirected = client.expand(f"{base_url}/short")
        not_redirected = client.expand(f"{base_url}/final?x=a b")
    finally:
        client.close()

    assert redirected.expanded_url == f"{base_url}/maps/@23.7957,86.4304,13z"
    assert not_redirected.expanded_url is None
    assert not_redirected.error == "No redirect found"
