"""キャッシュ付きジオコーダー"""

from typing import Optional, Union

from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_address_key
from ..domain.models import Coordinate, ForwardGeocodeResult, ReverseGeocodeResult
from .base import AbstractGeocoder

logger = get_logger(__name__)

CachedResult = Union[ForwardGeocodeResult, ReverseGeocodeResult]


class CacheGeocoder(AbstractGeocoder):
    """
    キャッシュ付きジオコーダー

    同じ住所・同じ地点への重複したAPI呼び出しを削減するため、
    メモリ内キャッシュを使用
    """

    def __init__(self, geocoder: AbstractGeocoder) -> None:
        """
        Args:
            geocoder: ベースとなるジオコーダー
        """
        self.geocoder = geocoder
        self.cache: dict[str, CachedResult] = {}
        self.hit_count = 0
        self.miss_count = 0

        logger.info("CacheGeocoder initialized")

    async def forward_geocode(self, query: str) -> Optional[ForwardGeocodeResult]:
        """
        住所をジオコーディング（キャッシュあり）

        None は「該当なし」と「通信失敗」を区別できないためキャッシュしない
        """
        cache_key = f"forward:{normalize_address_key(query)}"

        if cache_key in self.cache:
            self.hit_count += 1
            logger.debug(f"Cache hit for address: {query}")
            return self.cache[cache_key]  # type: ignore[return-value]

        self.miss_count += 1
        logger.debug(f"Cache miss for address: {query}")

        result = await self.geocoder.forward_geocode(query)
        if result is not None:
            self.cache[cache_key] = result

        return result

    async def reverse_geocode(self, point: Coordinate) -> Optional[ReverseGeocodeResult]:
        """
        座標から住所を取得（キャッシュあり）
        """
        # 小数点以下6桁（約10cm）で丸める
        cache_key = f"reverse:{point.lat:.6f},{point.lon:.6f}"

        if cache_key in self.cache:
            self.hit_count += 1
            logger.debug(f"Cache hit for coordinates: {point.to_tuple()}")
            return self.cache[cache_key]  # type: ignore[return-value]

        self.miss_count += 1
        logger.debug(f"Cache miss for coordinates: {point.to_tuple()}")

        result = await self.geocoder.reverse_geocode(point)
        if result is not None:
            self.cache[cache_key] = result

        return result

    def clear_cache(self) -> None:
        """キャッシュをクリア"""
        cache_size = len(self.cache)
        self.cache.clear()
        self.hit_count = 0
        self.miss_count = 0
        logger.info(f"Cache cleared: {cache_size} entries removed")

    def get_cache_stats(self) -> dict[str, float]:
        """
        キャッシュ統計を取得

        Returns:
            dict[str, float]: キャッシュ統計（サイズ、ヒット数、ミス数、ヒット率）
        """
        total_requests = self.hit_count + self.miss_count
        hit_rate = (self.hit_count / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "cache_size": len(self.cache),
            "hit_count": self.hit_count,
            "miss_count": self.miss_count,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }
