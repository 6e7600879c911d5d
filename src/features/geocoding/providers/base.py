"""ジオコーダーの基底クラス"""

from abc import ABC, abstractmethod
from typing import Optional

from ..domain.models import Coordinate, ForwardGeocodeResult, ReverseGeocodeResult


class AbstractGeocoder(ABC):
    """
    ジオコーダーの抽象基底クラス

    実装は例外を外に投げず、失敗時は None を返すこと
    """

    @abstractmethod
    async def forward_geocode(self, query: str) -> Optional[ForwardGeocodeResult]:
        """
        住所文字列から座標を取得

        Args:
            query: 住所や地名

        Returns:
            Optional[ForwardGeocodeResult]: 最上位の結果（見つからない場合はNone）
        """
        pass

    @abstractmethod
    async def reverse_geocode(self, point: Coordinate) -> Optional[ReverseGeocodeResult]:
        """
        座標から住所を取得

        Args:
            point: 座標

        Returns:
            Optional[ReverseGeocodeResult]: 住所情報（見つからない場合はNone）
        """
        pass
