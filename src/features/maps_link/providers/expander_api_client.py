"""短縮リンク展開サービスのAPIクライアント"""
from typing import Optional
from urllib.parse import urlparse

from ..domain.models import Coordinate, ExpansionOutcome
from ....shared.exceptions.errors import (
    ConfigurationError,
    ExpansionServiceError,
    HTTPError,
    ValidationError,
)
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger

logger = get_logger(__name__)


class ExpanderAPIClient:
    """GET /expand?url=... を呼び出すクライアント"""

    def __init__(
        self,
        base_url: str,
        http_client: Optional[HTTPClient] = None,
        timeout: float = 10,
    ) -> None:
        """
        Args:
            base_url: 展開サービスのベースURL（例: http://localhost:3001）
            http_client: HTTPクライアント（Noneの場合は新規作成）
            timeout: 展開サービス呼び出しのタイムアウト（秒）

        Raises:
            ConfigurationError: ベースURLがhttp(s)のURLでない場合
        """
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid expansion service URL: {base_url!r}")

        self.base_url = base_url.rstrip("/")
        self.http_client = http_client or HTTPClient(timeout=timeout)
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/expand"

    def expand(self, url: str) -> ExpansionOutcome:
        """
        展開サービスに短縮リンクの展開を依頼

        Args:
            url: 短縮リンク

        Returns:
            ExpansionOutcome: 展開結果（サービスが400を返した場合はerrorのみ設定）

        Raises:
            ExpansionServiceError: サービスに到達できない、5xx、または応答が不正な場合
        """
        try:
            response = self.http_client.get(
                self.endpoint,
                params={"url": url},
                raise_for_status=False,
                timeout=self.timeout,
            )
        except HTTPError as e:
            raise ExpansionServiceError(f"Expansion service unreachable: {e}") from e

        if response.status_code >= 500:
            raise ExpansionServiceError(
                f"Expansion service returned status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ExpansionServiceError("Expansion service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ExpansionServiceError("Expansion service returned unexpected payload")

        if response.status_code >= 400:
            if "error" not in data:
                raise ExpansionServiceError(
                    f"Expansion service returned status {response.status_code}"
                )
            logger.info(f"Expansion service rejected {url}: {data['error']}")
            return ExpansionOutcome(error=str(data["error"]))

        expanded_url = data.get("expanded") or None
        direct_coordinate = None

        latitude = data.get("lat")
        longitude = data.get("lng")
        if latitude is not None and longitude is not None:
            try:
                direct_coordinate = Coordinate.from_strings(str(latitude), str(longitude))
            except ValidationError as e:
                logger.warning(f"Ignoring invalid coordinates from expansion service: {e}")

        if expanded_url is None and direct_coordinate is None:
            raise ExpansionServiceError("Expansion service returned no usable location")

        return ExpansionOutcome(
            expanded_url=expanded_url,
            direct_coordinate=direct_coordinate,
            error=data.get("error"),
        )

    def close(self) -> None:
        self.http_client.close()
