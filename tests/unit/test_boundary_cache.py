"""境界キャッシュと境界判定サービスのテスト"""

from typing import Optional

import pytest

from src.features.boundary.domain.models import BoundaryGeometry, ContainmentVerdict, Polygon
from src.features.boundary.providers.boundary_cache import BoundaryCache
from src.features.boundary.services.boundary_service import BoundaryValidationService
from src.features.geocoding.domain.models import Coordinate
from tests.conftest import coordinate_ring

GEOMETRY = BoundaryGeometry(parts=(Polygon(outer=coordinate_ring([(0, 0), (0, 4), (4, 4), (4, 0)])),))


class CountingLoader:
    """呼び出し回数を数える偽ローダー"""

    def __init__(self, results: Optional[list[Optional[BoundaryGeometry]]] = None) -> None:
        self.results = list(results) if results is not None else []
        self.calls: list[str] = []

    async def load(self, source: str) -> Optional[BoundaryGeometry]:
        self.calls.append(source)
        if self.results:
            return self.results.pop(0)
        return GEOMETRY


@pytest.mark.asyncio
async def test_loader_called_once_per_source() -> None:
    """同じ取得元の二回目以降はローダーを呼ばない"""
    loader = CountingLoader()
    cache = BoundaryCache(loader)

    first = await cache.get_or_load("boundary.geojson")
    second = await cache.get_or_load("boundary.geojson")
    third = await cache.get_or_load("boundary.geojson")

    assert first is second is third is GEOMETRY
    assert loader.calls == ["boundary.geojson"]
    assert cache.hit_count == 2
    assert cache.miss_count == 1


@pytest.mark.asyncio
async def test_sources_are_cached_independently() -> None:
    loader = CountingLoader()
    cache = BoundaryCache(loader)

    await cache.get_or_load("a.geojson")
    await cache.get_or_load("b.geojson")
    await cache.get_or_load("a.geojson")

    assert loader.calls == ["a.geojson", "b.geojson"]


@pytest.mark.asyncio
async def test_failed_load_is_retried() -> None:
    """読み込み失敗はキャッシュされない"""
    loader = CountingLoader(results=[None, GEOMETRY])
    cache = BoundaryCache(loader)

    assert await cache.get_or_load("flaky.geojson") is None
    assert await cache.get_or_load("flaky.geojson") is GEOMETRY
    assert await cache.get_or_load("flaky.geojson") is GEOMETRY
    assert len(loader.calls) == 2


@pytest.mark.asyncio
async def test_invalidate_forces_reload() -> None:
    loader = CountingLoader()
    cache = BoundaryCache(loader)

    await cache.get_or_load("a.geojson")
    await cache.get_or_load("b.geojson")
    cache.invalidate("a.geojson")
    await cache.get_or_load("a.geojson")
    await cache.get_or_load("b.geojson")

    assert loader.calls == ["a.geojson", "b.geojson", "a.geojson"]

    cache.invalidate()
    assert cache.cache == {}


@pytest.mark.asyncio
async def test_validation_service_verdicts() -> None:
    service = BoundaryValidationService(BoundaryCache(CountingLoader()), "boundary.geojson")

    assert await service.check(Coordinate(lat=2, lon=2)) is ContainmentVerdict.INSIDE
    assert await service.check(Coordinate(lat=5, lon=5)) is ContainmentVerdict.OUTSIDE
    assert await service.is_available() is True


@pytest.mark.asyncio
async def test_validation_service_unavailable_when_load_fails() -> None:
    """境界が取得できない場合は境界外ではなく判定不可"""
    service = BoundaryValidationService(
        BoundaryCache(CountingLoader(results=[None, None])), "boundary.geojson"
    )

    verdict = await service.check(Coordinate(lat=2, lon=2))

    assert verdict is ContainmentVerdict.UNAVAILABLE
    assert verdict.is_inside is False
    assert await service.is_available() is False


@pytest.mark.asyncio
async def test_validation_service_unavailable_without_source() -> None:
    loader = CountingLoader()
    service = BoundaryValidationService(BoundaryCache(loader), None)

    assert await service.check(Coordinate(lat=2, lon=2)) is ContainmentVerdict.UNAVAILABLE
    assert loader.calls == []
