"""行政境界機能のドメインモデル"""
from dataclasses import dataclass
from enum import Enum
from typing import Union

from ...geocoding.domain.models import Coordinate

# 閉じたループ（始点と終点の重複は不要）
Ring = tuple[Coordinate, ...]


class GeometryKind(str, Enum):
    """境界ジオメトリの種類"""

    POLYGON = "Polygon"
    MULTIPOLYGON = "MultiPolygon"


class ContainmentVerdict(str, Enum):
    """境界内判定の結果"""

    INSIDE = "inside"  # 境界内
    OUTSIDE = "outside"  # 境界外
    UNAVAILABLE = "unavailable"  # 境界データが読めず判定不可（境界外とは区別する）

    @property
    def is_inside(self) -> bool:
        return self is ContainmentVerdict.INSIDE


@dataclass(frozen=True)
class Polygon:
    """外周リング + 穴リング（0個以上）"""

    outer: Ring
    holes: tuple[Ring, ...] = ()

    kind = GeometryKind.POLYGON


@dataclass(frozen=True)
class MultiPolygon:
    """ポリゴンの列（いずれかに含まれれば内側）"""

    polygons: tuple[Polygon, ...]

    kind = GeometryKind.MULTIPOLYGON


Shape = Union[Polygon, MultiPolygon]


@dataclass(frozen=True)
class BoundaryGeometry:
    """
    正規化済みの境界ジオメトリ

    生のPolygon/MultiPolygon、Feature、FeatureCollectionのいずれから
    読み込んでも、寄与する図形の列に正規化される。
    点はいずれかの図形に含まれれば境界内
    """

    parts: tuple[Shape, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("BoundaryGeometry requires at least one shape")

    @property
    def kind(self) -> GeometryKind:
        """単一図形ならその種類、複数図形（FeatureCollection由来）は MultiPolygon 扱い"""
        if len(self.parts) == 1:
            return self.parts[0].kind
        return GeometryKind.MULTIPOLYGON

    @property
    def polygon_count(self) -> int:
        count = 0
        for part in self.parts:
            count += len(part.polygons) if isinstance(part, MultiPolygon) else 1
        return count
