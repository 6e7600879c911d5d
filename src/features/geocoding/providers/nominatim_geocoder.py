"""Nominatim（OpenStreetMap）ジオコーディング実装"""
from typing import Any, Optional

from ....shared.exceptions.errors import GeocodingError, HTTPError
from ....shared.http.client import AsyncHTTPClient
from ....shared.logging.config import get_logger
from ....shared.utils.text import truncate_text
from ..domain.models import (
    AddressRecord,
    Coordinate,
    ForwardGeocodeResult,
    ReverseGeocodeResult,
)
from .base import AbstractGeocoder

logger = get_logger(__name__)

# これより短いクエリはネットワークに出さない
MIN_QUERY_LENGTH = 3


class NominatimGeocoder(AbstractGeocoder):
    """
    Nominatim APIのクライアント

    APIキー不要。公開サーバーはレート制限が緩く定められているだけなので、
    ドラッグ毎の連続呼び出しなどの間引きは呼び出し側の責任とする
    """

    def __init__(
        self,
        http_client: AsyncHTTPClient,
        base_url: str = "https://nominatim.openstreetmap.org",
        geocode_user_agent: str = "mphs-oku-sticker/1.0 (geocode)",
        reverse_user_agent: str = "mphs-oku-sticker/1.0 (reverse)",
    ) -> None:
        """
        Args:
            http_client: 非同期HTTPクライアント
            base_url: NominatimのベースURL
            geocode_user_agent: forward検索用のクライアント識別子
            reverse_user_agent: reverse検索用のクライアント識別子
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.geocode_user_agent = geocode_user_agent
        self.reverse_user_agent = reverse_user_agent

        logger.info(f"NominatimGeocoder initialized: {self.base_url}")

    async def forward_geocode(self, query: str) -> Optional[ForwardGeocodeResult]:
        """
        住所をジオコーディング

        Args:
            query: 住所文字列（前後空白を除いて3文字以上）

        Returns:
            Optional[ForwardGeocodeResult]: 最上位の結果（見つからない・失敗時はNone）
        """
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            logger.debug(f"Query too short for geocoding: {query!r}")
            return None

        params = {
            "q": query,
            "format": "json",
            "addressdetails": "1",
            "limit": "1",
        }

        try:
            logger.debug(f"Geocoding address: {query}")
            data = await self.http_client.get_json(
                f"{self.base_url}/search",
                params=params,
                headers={"User-Agent": self.geocode_user_agent},
            )
            result = self._parse_search(data)

        except HTTPError as e:
            logger.warning(f"Geocoding request failed for '{truncate_text(query, 50)}': {e}")
            return None
        except GeocodingError as e:
            logger.warning(f"Unexpected geocoding payload for '{truncate_text(query, 50)}': {e}")
            return None

        if result is None:
            logger.info(f"No geocoding results for address: {truncate_text(query, 100)}")
            return None

        logger.debug(f"Geocoded: {query} -> {result.coordinate.to_tuple()}")
        return result

    async def reverse_geocode(self, point: Coordinate) -> Optional[ReverseGeocodeResult]:
        """
        座標から住所を取得（逆ジオコーディング）

        Args:
            point: 座標

        Returns:
            Optional[ReverseGeocodeResult]: 住所情報（見つからない・失敗時はNone）
        """
        params = {
            "lat": str(point.lat),
            "lon": str(point.lon),
            "format": "json",
            "addressdetails": "1",
        }

        try:
            logger.debug(f"Reverse geocoding: {point.to_tuple()}")
            data = await self.http_client.get_json(
                f"{self.base_url}/reverse",
                params=params,
                headers={"User-Agent": self.reverse_user_agent},
            )
            result = self._parse_reverse(data)

        except HTTPError as e:
            logger.warning(f"Reverse geocoding request failed for {point.to_tuple()}: {e}")
            return None
        except GeocodingError as e:
            logger.warning(f"Unexpected reverse geocoding payload for {point.to_tuple()}: {e}")
            return None

        if result is not None:
            logger.debug(f"Reverse geocoded: {point.to_tuple()} -> {result.display_name}")
        return result

    def _parse_search(self, data: Any) -> Optional[ForwardGeocodeResult]:
        """
        /search のレスポンス（配列）を解釈

        Raises:
            GeocodingError: 想定外の形式
        """
        if not isinstance(data, list):
            raise GeocodingError(f"Expected JSON array, got {type(data).__name__}")
        if not data:
            return None

        first = data[0]
        if not isinstance(first, dict):
            raise GeocodingError("Search result is not an object")

        try:
            coordinate = Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Invalid lat/lon in search result: {e}") from e

        return ForwardGeocodeResult(
            coordinate=coordinate,
            display_name=first.get("display_name"),
            address=self._parse_address(first.get("address")),
        )

    def _parse_reverse(self, data: Any) -> Optional[ReverseGeocodeResult]:
        """
        /reverse のレスポンス（オブジェクト）を解釈

        Raises:
            GeocodingError: 想定外の形式
        """
        if not isinstance(data, dict):
            raise GeocodingError(f"Expected JSON object, got {type(data).__name__}")

        # 海上など住所がない地点では {"error": "Unable to geocode"} が返る
        if "error" in data:
            logger.info(f"Nominatim reverse returned error: {data.get('error')}")
            return None

        return ReverseGeocodeResult(
            display_name=data.get("display_name"),
            address=self._parse_address(data.get("address")),
        )

    @staticmethod
    def _parse_address(raw: Any) -> AddressRecord:
        """address オブジェクトから文字列値のみを取り出す"""
        if not isinstance(raw, dict):
            return {}
        return {key: value for key, value in raw.items() if isinstance(value, str)}
