"""座標解決のエントリーポイント"""

from typing import Optional

from ..domain.enums import FailureReason
from ..domain.models import (
    ExpansionNeeded,
    ExtractionAttemptResult,
    Resolved,
    ResolutionFailure,
    ResolutionResult,
)
from ..providers.direct_redirect_client import DirectRedirectClient
from ..providers.expander_api_client import ExpanderAPIClient
from .link_resolver import LinkResolver
from .redirect_expansion_client import RedirectExpansionClient
from ....infrastructure.config.settings import Settings
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class MapsLocationService:
    """
    フォームから渡された文字列を座標に解決するサービス

    - check(): ネットワークを使わない同期チェック
    - resolve(): 必要に応じて短縮リンクを展開する非同期解決
    """

    def __init__(
        self,
        resolver: Optional[LinkResolver] = None,
        expansion_client: Optional[RedirectExpansionClient] = None,
    ) -> None:
        """
        Args:
            resolver: リンクリゾルバー
            expansion_client: 短縮リンク展開クライアント（Noneの場合は展開しない）
        """
        self.resolver = resolver or LinkResolver()
        self.expansion_client = expansion_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MapsLocationService":
        """設定からサービスを構築"""
        resolver = LinkResolver()
        http_client = HTTPClient(timeout=settings.expander_timeout, user_agent=settings.user_agent)

        direct_client = None
        if settings.direct_fallback_enabled:
            direct_client = DirectRedirectClient(
                http_client=http_client, timeout=settings.redirect_fetch_timeout
            )

        expansion_client = RedirectExpansionClient(
            expander_api=ExpanderAPIClient(
                settings.expander_base_url,
                http_client=http_client,
                timeout=settings.expander_timeout,
            ),
            resolver=resolver,
            direct_client=direct_client,
        )

        logger.info(
            f"MapsLocationService initialized: expander={settings.expander_base_url}, "
            f"direct_fallback={settings.direct_fallback_enabled}"
        )
        return cls(resolver=resolver, expansion_client=expansion_client)

    def check(self, text: Optional[str]) -> ExtractionAttemptResult:
        """
        ネットワークを使わずに解決を試みる

        Args:
            text: 貼り付けられた文字列

        Returns:
            ExtractionAttemptResult: Resolved / ExpansionNeeded / Unresolved
        """
        return self.resolver.resolve(text)

    async def resolve(self, text: Optional[str]) -> ResolutionResult:
        """
        文字列を座標に解決（短縮リンクの場合は展開する）

        Args:
            text: 貼り付けられた文字列

        Returns:
            ResolutionResult: 座標、または失敗理由
        """
        result = self.check(text)

        if isinstance(result, Resolved):
            return result.coordinate

        if isinstance(result, ExpansionNeeded):
            if self.expansion_client is None:
                return ResolutionFailure(
                    reason=FailureReason.SERVICE_UNAVAILABLE,
                    message="Short link expansion is not configured",
                )
            return await self.expansion_client.expand_and_resolve(result.candidate_url)

        return ResolutionFailure(
            reason=FailureReason.UNRESOLVED,
            message="Could not extract coordinates from input",
        )

    def close(self) -> None:
        """HTTPセッションをクローズ"""
        if self.expansion_client is not None:
            self.expansion_client.expander_api.close()

    def __enter__(self) -> "MapsLocationService":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()
