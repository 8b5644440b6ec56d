"""短縮リンク展開クライアント（非同期）"""

import asyncio
from typing import Optional

from ..domain.enums import FailureReason
from ..domain.models import ExpansionOutcome, Resolved, ResolutionFailure, ResolutionResult
from ..providers.direct_redirect_client import DirectRedirectClient
from ..providers.expander_api_client import ExpanderAPIClient
from .link_resolver import LinkResolver
from ....shared.exceptions.errors import ExpansionServiceError, HTTPError
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class RedirectExpansionClient:
    """
    短縮リンクを展開サービス経由で展開し、座標を解決する

    処理順:
    1. 展開サービスに問い合わせる
    2. サービスが座標を直接返した場合はそれを採用
    3. 展開後URLが返された場合はリンクリゾルバーで再解析
    4. サービスに到達できない場合は短縮リンクを直接取得（有効時のみ）

    想定される失敗はすべて ResolutionFailure として返し、例外は送出しない。
    リトライは行わない。
    """

    def __init__(
        self,
        expander_api: ExpanderAPIClient,
        resolver: Optional[LinkResolver] = None,
        direct_client: Optional[DirectRedirectClient] = None,
    ) -> None:
        """
        Args:
            expander_api: 展開サービスのAPIクライアント
            resolver: 展開後URLの再解析に使うリゾルバー
            direct_client: フォールバック用の直接取得クライアント（Noneの場合はフォールバックなし）
        """
        self.expander_api = expander_api
        self.resolver = resolver or LinkResolver()
        self.direct_client = direct_client

    async def expand_and_resolve(self, candidate_url: str) -> ResolutionResult:
        """
        短縮リンクを展開して座標を解決

        Args:
            candidate_url: 短縮リンク

        Returns:
            ResolutionResult: 座標、または失敗理由
        """
        try:
            outcome = await asyncio.to_thread(self.expander_api.expand, candidate_url)
        except ExpansionServiceError as e:
            logger.warning(f"Expansion service failed for {candidate_url}: {e}")
            return await self._expand_directly(candidate_url, str(e))

        if outcome.direct_coordinate is not None:
            logger.debug(f"Expansion service returned coordinates: {outcome.direct_coordinate}")
            return outcome.direct_coordinate

        if outcome.expanded_url:
            return self._resolve_expanded(outcome)

        message = outcome.error or "No redirect found"
        logger.info(f"Short link could not be expanded: {candidate_url} ({message})")
        return ResolutionFailure(reason=FailureReason.NO_REDIRECT, message=message)

    async def _expand_directly(self, candidate_url: str, cause: str) -> ResolutionResult:
        """展開サービスを使わずに短縮リンクを直接取得"""
        if self.direct_client is None:
            return ResolutionFailure(reason=FailureReason.SERVICE_UNAVAILABLE, message=cause)

        try:
            outcome = await asyncio.to_thread(self.direct_client.expand, candidate_url)
        except HTTPError as e:
            logger.warning(f"Direct fetch failed for {candidate_url}: {e}")
            return ResolutionFailure(
                reason=FailureReason.SERVICE_UNAVAILABLE,
                message=f"{cause}; direct fetch failed: {e}",
            )

        if outcome.expanded_url:
            return self._resolve_expanded(outcome)

        return ResolutionFailure(reason=FailureReason.SERVICE_UNAVAILABLE, message=cause)

    def _resolve_expanded(self, outcome: ExpansionOutcome) -> ResolutionResult:
        """展開後URLをリンクリゾルバーで再解析"""
        expanded_url = outcome.expanded_url or ""
        result = self.resolver.resolve(expanded_url)

        if isinstance(result, Resolved):
            logger.debug(f"Resolved expanded URL by '{result.rule_name}': {result.coordinate}")
            return result.coordinate

        logger.info(f"No coordinates in expanded URL: {expanded_url}")
        return ResolutionFailure(
            reason=FailureReason.NO_COORDINATES,
            message=outcome.error or "No coordinates found in expanded URL",
            expanded_url=expanded_url,
        )
