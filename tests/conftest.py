"""テスト共通フィクスチャ"""

import json
from typing import Any, Callable

import httpx
import pytest

from src.features.geocoding.domain.models import Coordinate
from src.infrastructure.config.settings import Settings
from src.shared.http.client import AsyncHTTPClient

Handler = Callable[[httpx.Request], httpx.Response]


def square_ring(min_xy: float, max_xy: float) -> list[list[float]]:
    """GeoJSON形式（[経度, 緯度]）の正方形リング"""
    return [
        [min_xy, min_xy],
        [min_xy, max_xy],
        [max_xy, max_xy],
        [max_xy, min_xy],
    ]


def coordinate_ring(points: list[tuple[float, float]]) -> tuple[Coordinate, ...]:
    """(緯度, 経度) のリストからリングを作る"""
    return tuple(Coordinate(lat=lat, lon=lon) for lat, lon in points)


@pytest.fixture
def make_http_client() -> Callable[[Handler], AsyncHTTPClient]:
    """MockTransportを使うHTTPクライアントのファクトリ"""

    def factory(handler: Handler) -> AsyncHTTPClient:
        return AsyncHTTPClient(timeout=5.0, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def polygon_geojson() -> dict[str, Any]:
    """0〜4 の正方形に 1〜3 の穴があるPolygon"""
    return {
        "type": "Polygon",
        "coordinates": [square_ring(0, 4), square_ring(1, 3)],
    }


@pytest.fixture
def boundary_file(tmp_path: Any, polygon_geojson: dict[str, Any]) -> str:
    path = tmp_path / "boundary.geojson"
    path.write_text(json.dumps(polygon_geojson), encoding="utf-8")
    return str(path)


@pytest.fixture
def settings(boundary_file: str) -> Settings:
    return Settings(
        _env_file=None,
        boundary_geojson_url=boundary_file,
        nominatim_base_url="https://nominatim.test",
        geocoding_rate_limit=1000.0,
    )
