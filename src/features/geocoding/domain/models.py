"""ジオコーディング機能のドメインモデル"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Nominatimの address オブジェクト（キーは検索毎に異なり、保証されるキーはない）
AddressRecord = dict[str, str]


@dataclass(frozen=True)
class Coordinate:
    """WGS84の座標（緯度・経度、十進度）"""

    lat: float  # 緯度
    lon: float  # 経度

    def __post_init__(self) -> None:
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180 <= self.lon <= 180:
            raise ValueError(f"Longitude out of range: {self.lon}")

    def __repr__(self) -> str:
        return f"Coordinate(lat={self.lat}, lon={self.lon})"

    def to_tuple(self) -> tuple[float, float]:
        """(緯度, 経度)のタプルとして返す"""
        return (self.lat, self.lon)

    @classmethod
    def from_geojson(cls, position: Any) -> "Coordinate":
        """
        GeoJSONの [経度, 緯度] から生成（軸順を入れ替える）

        Raises:
            ValueError: 数値2つ以上の配列でない場合
        """
        if not isinstance(position, (list, tuple)) or len(position) < 2:
            raise ValueError(f"Invalid GeoJSON position: {position!r}")
        lon, lat = position[0], position[1]
        return cls(lat=float(lat), lon=float(lon))


@dataclass(frozen=True)
class SubdivisionLabels:
    """行政区画ラベル（daerah / mukim）"""

    district: Optional[str] = None  # daerah
    sub_district: Optional[str] = None  # mukim


@dataclass(frozen=True)
class ForwardGeocodeResult:
    """住所検索の結果（最上位の1件）"""

    coordinate: Coordinate
    display_name: Optional[str] = None
    address: AddressRecord = field(default_factory=dict)


@dataclass(frozen=True)
class ReverseGeocodeResult:
    """逆ジオコーディングの結果"""

    display_name: Optional[str] = None
    address: AddressRecord = field(default_factory=dict)


@dataclass(frozen=True)
class LocationResult:
    """
    地図ピッカーが呼び出し元に返す位置情報

    ユーザー操作の度に新しく生成され、変更されることはない
    """

    coordinate: Coordinate
    address: Optional[str] = None
    labels: SubdivisionLabels = field(default_factory=SubdivisionLabels)

    @property
    def district(self) -> Optional[str]:
        return self.labels.district

    @property
    def sub_district(self) -> Optional[str]:
        return self.labels.sub_district

    def to_dict(self) -> dict[str, Any]:
        """フォームへ渡す辞書に変換（値がないキーは含めない）"""
        data: dict[str, Any] = {
            "lat": self.coordinate.lat,
            "lon": self.coordinate.lon,
        }
        if self.address is not None:
            data["address"] = self.address
        if self.labels.district is not None:
            data["district"] = self.labels.district
        if self.labels.sub_district is not None:
            data["sub_district"] = self.labels.sub_district
        return data


class ResolutionSource(str, Enum):
    """住所から座標を得た方法"""

    NOMINATIM = "nominatim"  # Nominatimの住所検索
    GAZETTEER = "gazetteer"  # 地名辞書によるオフライン推定
    UNRESOLVED = "unresolved"  # 推定できず


@dataclass(frozen=True)
class AddressEntry:
    """バッチ処理の入力（申請の住所）"""

    ref: str  # 申請番号など
    address: str
    mukim: Optional[str] = None
    daerah: Optional[str] = None


@dataclass(frozen=True)
class AddressResolution:
    """バッチ処理の結果"""

    entry: AddressEntry
    source: ResolutionSource
    location: Optional[LocationResult] = None

    @property
    def resolved(self) -> bool:
        return self.location is not None
