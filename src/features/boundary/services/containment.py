"""点の境界内判定（レイキャスティング法）

I/Oなし・同期・決定的。x を経度、y を緯度として扱う。
辺上の点の判定は比較演算の結果に任せる（どちらにもなり得る）
"""
from typing import Union

from ...geocoding.domain.models import Coordinate
from ..domain.models import BoundaryGeometry, MultiPolygon, Polygon, Ring


def point_in_ring(point: Coordinate, ring: Ring) -> bool:
    """半直線と辺の交差回数の偶奇で判定"""
    x = point.lon
    y = point.lat
    inside = False

    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].lon, ring[i].lat
        xj, yj = ring[j].lon, ring[j].lat
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i

    return inside


def point_in_polygon(point: Coordinate, polygon: Polygon) -> bool:
    """外周の内側で、かついずれの穴にも入っていなければ True"""
    if not point_in_ring(point, polygon.outer):
        return False

    for hole in polygon.holes:
        if point_in_ring(point, hole):
            return False

    return True


def point_in_multipolygon(point: Coordinate, multi: MultiPolygon) -> bool:
    return any(point_in_polygon(point, polygon) for polygon in multi.polygons)


def contains(point: Coordinate, geometry: Union[BoundaryGeometry, Polygon, MultiPolygon]) -> bool:
    """
    点が境界内にあるか

    Args:
        point: 判定する座標
        geometry: 境界ジオメトリ（単体のPolygon/MultiPolygonも可）

    Returns:
        bool: いずれかの図形に含まれれば True
    """
    if isinstance(geometry, Polygon):
        return point_in_polygon(point, geometry)
    if isinstance(geometry, MultiPolygon):
        return point_in_multipolygon(point, geometry)

    for part in geometry.parts:
        if contains(point, part):
            return True
    return False
