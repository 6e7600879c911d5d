"""境界ジオメトリのプロセス内キャッシュ"""
from typing import Optional, Protocol

from ....shared.logging.config import get_logger
from ..domain.models import BoundaryGeometry

logger = get_logger(__name__)


class BoundaryLoader(Protocol):
    async def load(self, source: str) -> Optional[BoundaryGeometry]: ...


class BoundaryCache:
    """
    取得元ごとに境界ジオメトリをメモ化

    境界は静的な参照データとして扱い、自動では無効化しない。
    読み込み失敗（None）はキャッシュしないため、次回呼び出しで再取得される。
    同時にキャッシュミスした場合の重複取得は許容する（結果は同じ）
    """

    def __init__(self, loader: BoundaryLoader) -> None:
        """
        Args:
            loader: 境界ローダー（テストでは偽物を注入）
        """
        self.loader = loader
        self.cache: dict[str, BoundaryGeometry] = {}
        self.hit_count = 0
        self.miss_count = 0

    async def get_or_load(self, source: str) -> Optional[BoundaryGeometry]:
        """
        キャッシュ済みならそれを、なければ読み込んで返す

        Args:
            source: 境界の取得元（URLまたはパス）

        Returns:
            Optional[BoundaryGeometry]: 境界（読み込めない場合はNone）
        """
        cached = self.cache.get(source)
        if cached is not None:
            self.hit_count += 1
            logger.debug(f"Boundary cache hit: {source}")
            return cached

        self.miss_count += 1
        logger.debug(f"Boundary cache miss: {source}")

        geometry = await self.loader.load(source)
        if geometry is not None:
            self.cache[source] = geometry

        return geometry

    def invalidate(self, source: Optional[str] = None) -> None:
        """
        キャッシュを破棄（明示的な再読み込み用）

        Args:
            source: 破棄する取得元（Noneの場合はすべて）
        """
        if source is None:
            size = len(self.cache)
            self.cache.clear()
            logger.info(f"Boundary cache cleared: {size} entries removed")
        else:
            self.cache.pop(source, None)
            logger.info(f"Boundary cache invalidated: {source}")
