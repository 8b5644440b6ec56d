"""HTTPクライアント"""

from typing import Any, Optional

import requests

from ..exceptions.errors import HTTPError
from ..logging.config import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; MineTrackMapsResolver/1.0)"


class HTTPClient:
    """
    セッション管理付きHTTPクライアント

    Features:
    - タイムアウト設定（リクエスト単位で上書き可能）
    - リダイレクト追従の有効/無効切り替え
    - セッション管理

    リトライは行わない。再試行は呼び出し側の責務とする。
    """

    def __init__(
        self,
        timeout: float = 10,
        user_agent: Optional[str] = None,
    ):
        """
        Args:
            timeout: デフォルトのリクエストタイムアウト（秒）
            user_agent: User-Agentヘッダー
        """
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT

        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """セッションを作成"""
        session = requests.Session()
        session.headers.update({"User-Agent": self.user_agent})
        return session

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        allow_redirects: bool = True,
        raise_for_status: bool = True,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """
        GETリクエスト

        Args:
            url: リクエストURL
            params: クエリパラメータ
            headers: 追加ヘッダー
            allow_redirects: リダイレクトを自動で追従するか
            raise_for_status: 4xx/5xxを例外にするか（Falseの場合はレスポンスをそのまま返す）
            timeout: このリクエストのみのタイムアウト（秒）

        Returns:
            レスポンスオブジェクト

        Raises:
            HTTPError: リクエスト失敗時
        """
        try:
            logger.debug(f"GET request to {url} (allow_redirects={allow_redirects})")
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                allow_redirects=allow_redirects,
                timeout=timeout if timeout is not None else self.timeout,
            )

            if raise_for_status:
                response.raise_for_status()
            logger.debug(f"GET request finished: {url} (status={response.status_code})")
            return response

        except requests.RequestException as e:
            logger.error(f"GET request failed: {url} - {e}")
            raise HTTPError(f"Failed to GET {url}: {e}") from e

    def close(self) -> None:
        """セッションをクローズ"""
        if self.session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
