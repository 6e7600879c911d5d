"""非同期HTTPクライアント（httpxベース）"""

from typing import Any, Optional

import httpx

from ..exceptions.errors import HTTPError
from ..logging.config import get_logger

logger = get_logger(__name__)


class AsyncHTTPClient:
    """
    httpx.AsyncClient の薄いラッパー

    Features:
    - タイムアウト設定
    - デフォルトUser-Agent
    - 失敗時は HTTPError に統一（リトライはしない）
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: リクエストタイムアウト（秒）
            user_agent: User-Agentヘッダー
            transport: httpxトランスポート（テスト時にMockTransportを差し込む）
        """
        self.timeout = timeout
        self.user_agent = user_agent or "mphs-oku-sticker/1.0"
        self.transport = transport

        self.client = self._create_client()

    def _create_client(self) -> httpx.AsyncClient:
        """クライアントを作成"""
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
            follow_redirects=True,
        )

    async def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """
        GETリクエスト

        Args:
            url: リクエストURL
            params: クエリパラメータ
            headers: 追加ヘッダー

        Returns:
            レスポンスオブジェクト

        Raises:
            HTTPError: 通信失敗または2xx以外のステータス
        """
        try:
            logger.debug(f"GET request to {url} params={params}")
            response = await self.client.get(url, params=params, headers=headers)
            response.raise_for_status()
            logger.debug(f"GET request successful: {url} (status={response.status_code})")
            return response

        except httpx.HTTPError as e:
            logger.warning(f"GET request failed: {url} - {e}")
            raise HTTPError(f"Failed to GET {url}: {e}") from e

    async def get_json(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        GETしてJSONとしてデコード

        Raises:
            HTTPError: 通信失敗、ステータス異常、JSONでないレスポンス
        """
        merged_headers = {"Accept": "application/json"}
        if headers:
            merged_headers.update(headers)

        response = await self.get(url, params=params, headers=merged_headers)

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Invalid JSON response from {url}: {e}")
            raise HTTPError(f"Invalid JSON from {url}: {e}") from e

    async def close(self) -> None:
        """クライアントをクローズ"""
        await self.client.aclose()
        logger.debug("HTTP client closed")

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
