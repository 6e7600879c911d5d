"""サービス区域の境界内判定サービス"""
from typing import Optional

from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinate
from ..domain.models import BoundaryGeometry, ContainmentVerdict
from ..providers.boundary_cache import BoundaryCache
from .containment import contains

logger = get_logger(__name__)


class BoundaryValidationService:
    """
    自治体のサービス区域に点が含まれるかを判定

    境界が読めない場合は UNAVAILABLE を返し、OUTSIDE とは区別する。
    申請は INSIDE の場合のみ受け付ける想定
    """

    def __init__(self, cache: BoundaryCache, source: Optional[str]) -> None:
        """
        Args:
            cache: 境界キャッシュ
            source: 境界GeoJSONの取得元（未設定の場合は常に判定不可）
        """
        self.cache = cache
        self.source = source

        if not source:
            logger.warning("Boundary GeoJSON source is not configured; validation unavailable")

    async def get_boundary(self) -> Optional[BoundaryGeometry]:
        """境界ジオメトリを取得（キャッシュ経由）"""
        if not self.source:
            return None
        return await self.cache.get_or_load(self.source)

    async def is_available(self) -> bool:
        """境界判定が可能か"""
        return await self.get_boundary() is not None

    async def check(self, point: Coordinate) -> ContainmentVerdict:
        """
        点の境界内判定

        Args:
            point: 判定する座標

        Returns:
            ContainmentVerdict: INSIDE / OUTSIDE / UNAVAILABLE
        """
        boundary = await self.get_boundary()
        if boundary is None:
            return ContainmentVerdict.UNAVAILABLE

        inside = contains(point, boundary)
        logger.debug(f"Boundary check: {point.to_tuple()} inside={inside}")

        return ContainmentVerdict.INSIDE if inside else ContainmentVerdict.OUTSIDE
