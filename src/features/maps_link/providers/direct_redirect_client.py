"""短縮リンクを直接取得するフォールバック用クライアント"""
from typing import Optional

from ..domain.models import ExpansionOutcome
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class DirectRedirectClient:
    """
    展開サービスを使わず、短縮リンクをリダイレクト追従付きで取得する

    最終的なURLだけを返す。ブラウザから呼ぶ場合はCORSで失敗することがあるため、
    あくまでベストエフォートの手段。
    """

    def __init__(self, http_client: Optional[HTTPClient] = None, timeout: float = 10) -> None:
        self.http_client = http_client or HTTPClient(timeout=timeout)
        self.timeout = timeout

    def expand(self, url: str) -> ExpansionOutcome:
        """
        短縮リンクを取得し、リダイレクト後の最終URLを返す

        Raises:
            HTTPError: リクエスト失敗時
        """
        response = self.http_client.get(url, allow_redirects=True, timeout=self.timeout)

        if not response.history:
            logger.debug(f"Direct fetch did not redirect: {url}")
            return ExpansionOutcome(error="No redirect found")

        final_url = response.url
        logger.debug(f"Direct fetch redirected: {url} -> {final_url}")
        return ExpansionOutcome(expanded_url=final_url)

    def close(self) -> None:
        self.http_client.close()
