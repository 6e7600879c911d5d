"""レート制限ユーティリティ（Nominatim利用規約への配慮）"""

import asyncio
import time
from typing import Optional

from ..logging.config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    リクエスト間に最低待機時間を設ける非同期レート制限

    Nominatimの公開サーバーは1リクエスト/秒が上限のため、
    バッチ処理ではこのクラスを通してリクエストを間引く
    """

    def __init__(
        self,
        min_interval: float = 1.0,
        requests_per_second: Optional[float] = None,
    ):
        """
        Args:
            min_interval: リクエスト間の最小間隔（秒）
            requests_per_second: 秒あたりの最大リクエスト数（設定時はmin_intervalを上書き）
        """
        if requests_per_second:
            self.min_interval = 1.0 / requests_per_second
        else:
            self.min_interval = min_interval

        self.last_request_time: Optional[float] = None
        self._lock = asyncio.Lock()

        logger.debug(f"RateLimiter initialized: min_interval={self.min_interval:.2f}s")

    async def wait(self) -> None:
        """
        前回のリクエストからの経過時間を考慮して待機
        """
        async with self._lock:
            current_time = time.monotonic()

            if self.last_request_time is not None:
                elapsed = current_time - self.last_request_time

                if elapsed < self.min_interval:
                    sleep_duration = self.min_interval - elapsed
                    logger.debug(f"Rate limiting: sleeping for {sleep_duration:.2f}s")
                    await asyncio.sleep(sleep_duration)

            self.last_request_time = time.monotonic()

    def reset(self) -> None:
        """レート制限をリセット"""
        self.last_request_time = None
        logger.debug("RateLimiter reset")
