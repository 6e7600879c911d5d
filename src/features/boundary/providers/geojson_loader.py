"""GeoJSON形式の行政境界ローダー"""
import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ....shared.exceptions.errors import BoundaryError, HTTPError
from ....shared.http.client import AsyncHTTPClient
from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinate
from ..domain.models import BoundaryGeometry, MultiPolygon, Polygon, Ring, Shape

logger = get_logger(__name__)

SUPPORTED_GEOMETRIES = ("Polygon", "MultiPolygon")

# URL・ファイルパス、またはデコード済みのGeoJSON
BoundarySource = Union[str, Mapping[str, Any]]


def _parse_ring(raw: Any) -> Ring:
    if not isinstance(raw, list):
        raise BoundaryError("Ring must be an array of positions")
    try:
        # GeoJSONは [経度, 緯度] の順
        return tuple(Coordinate.from_geojson(position) for position in raw)
    except (TypeError, ValueError) as e:
        raise BoundaryError(f"Invalid position in ring: {e}") from e


def _parse_polygon(raw: Any) -> Polygon:
    if not isinstance(raw, list) or not raw:
        raise BoundaryError("Polygon must contain at least one ring")
    rings = [_parse_ring(ring) for ring in raw]
    return Polygon(outer=rings[0], holes=tuple(rings[1:]))


def _parse_geometry(geometry: Any) -> Shape:
    if not isinstance(geometry, dict):
        raise BoundaryError("Geometry must be an object")

    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates")

    if geometry_type == "Polygon":
        return _parse_polygon(coordinates)
    if geometry_type == "MultiPolygon":
        if not isinstance(coordinates, list):
            raise BoundaryError("MultiPolygon coordinates must be an array")
        return MultiPolygon(polygons=tuple(_parse_polygon(polygon) for polygon in coordinates))

    raise BoundaryError(f"Unsupported geometry type: {geometry_type}")


def parse_boundary(data: Any) -> BoundaryGeometry:
    """
    デコード済みのGeoJSONを BoundaryGeometry に正規化

    対応する最上位の形:
    - Polygon / MultiPolygon（生のジオメトリ）
    - Feature（ジオメトリがPolygon/MultiPolygon）
    - FeatureCollection（Polygon/MultiPolygonのFeatureすべて。その他は無視）

    Raises:
        BoundaryError: 対応していない形、または座標が不正な場合
    """
    if not isinstance(data, Mapping):
        raise BoundaryError(f"GeoJSON root must be an object, got {type(data).__name__}")

    root_type = data.get("type")

    if root_type in SUPPORTED_GEOMETRIES:
        return BoundaryGeometry(parts=(_parse_geometry(data),))

    if root_type == "Feature":
        return BoundaryGeometry(parts=(_parse_geometry(data.get("geometry")),))

    if root_type == "FeatureCollection":
        features = data.get("features")
        if not isinstance(features, list):
            raise BoundaryError("FeatureCollection.features must be an array")

        parts: list[Shape] = []
        for feature in features:
            geometry = feature.get("geometry") if isinstance(feature, dict) else None
            if not isinstance(geometry, dict) or geometry.get("type") not in SUPPORTED_GEOMETRIES:
                continue
            parts.append(_parse_geometry(geometry))

        if not parts:
            raise BoundaryError("FeatureCollection contains no Polygon/MultiPolygon features")
        return BoundaryGeometry(parts=tuple(parts))

    raise BoundaryError(f"Unsupported GeoJSON type: {root_type}")


class GeoJSONBoundaryLoader:
    """
    行政境界GeoJSONの取得と正規化

    取得・解析に失敗しても例外は投げずに None を返す。
    None は「判定不可」であり「境界外」ではない
    """

    def __init__(self, http_client: AsyncHTTPClient) -> None:
        """
        Args:
            http_client: 非同期HTTPクライアント
        """
        self.http_client = http_client

    async def load(self, source: BoundarySource) -> Optional[BoundaryGeometry]:
        """
        境界を取得して正規化

        Args:
            source: http(s)のURL、ローカルファイルのパス、またはデコード済みのGeoJSON

        Returns:
            Optional[BoundaryGeometry]: 正規化済みジオメトリ（失敗時はNone）
        """
        if not source:
            logger.warning("Boundary source is not configured")
            return None

        label = source if isinstance(source, str) else "<mapping>"

        try:
            data = await self._fetch(source)
            geometry = parse_boundary(data)

        except HTTPError as e:
            logger.warning(f"Failed to fetch boundary from {label}: {e}")
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read boundary file {label}: {e}")
            return None
        except BoundaryError as e:
            logger.warning(f"Invalid boundary GeoJSON from {label}: {e}")
            return None

        logger.info(
            f"Boundary loaded from {label}: kind={geometry.kind.value}, "
            f"parts={len(geometry.parts)}, polygons={geometry.polygon_count}"
        )
        return geometry

    async def _fetch(self, source: BoundarySource) -> Any:
        if isinstance(source, Mapping):
            return source
        if not isinstance(source, str):
            raise BoundaryError(f"Unsupported boundary source: {type(source).__name__}")

        if source.startswith(("http://", "https://")):
            return await self.http_client.get_json(source)

        # 境界ファイルは小さいため同期読み込みで十分
        return json.loads(Path(source).read_text(encoding="utf-8"))
