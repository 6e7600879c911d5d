"""ジオコーディングサービス"""

from typing import Iterable, Optional

from tqdm import tqdm

from ....infrastructure.config.settings import Settings
from ....shared.http.client import AsyncHTTPClient
from ....shared.http.rate_limiter import RateLimiter
from ....shared.logging.config import get_logger
from ..domain.models import (
    AddressEntry,
    AddressResolution,
    Coordinate,
    LocationResult,
    ResolutionSource,
    SubdivisionLabels,
)
from ..providers.base import AbstractGeocoder
from ..providers.cache_geocoder import CacheGeocoder
from ..providers.location_matcher import LocationMatcher
from ..providers.nominatim_geocoder import NominatimGeocoder
from .address_extractor import extract_labels

logger = get_logger(__name__)


class GeocodingService:
    """
    ジオコーディングサービス

    ジオコーダーの結果に daerah / mukim ラベルを付けて LocationResult にまとめる
    """

    def __init__(
        self,
        geocoder: AbstractGeocoder,
        matcher: Optional[LocationMatcher] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ) -> None:
        """
        Args:
            geocoder: ジオコーダー（キャッシュ付きでも可）
            matcher: 地名辞書によるフォールバック（Noneの場合は組み込み辞書）
            rate_limiter: バッチ処理時のレート制限（Noneの場合は1リクエスト/秒）
        """
        self.geocoder = geocoder
        self.matcher = matcher or LocationMatcher()
        self.rate_limiter = rate_limiter or RateLimiter(requests_per_second=1.0)

        logger.info(f"GeocodingService initialized: geocoder={type(geocoder).__name__}")

    @classmethod
    def from_settings(cls, settings: Settings, http_client: AsyncHTTPClient) -> "GeocodingService":
        """設定からNominatimベースのサービスを組み立てる"""
        geocoder: AbstractGeocoder = NominatimGeocoder(
            http_client,
            base_url=settings.nominatim_base_url,
            geocode_user_agent=settings.geocode_user_agent,
            reverse_user_agent=settings.reverse_user_agent,
        )
        if settings.geocoding_cache_enabled:
            geocoder = CacheGeocoder(geocoder)

        return cls(
            geocoder,
            rate_limiter=RateLimiter(requests_per_second=settings.geocoding_rate_limit),
        )

    async def search(self, query: str) -> Optional[LocationResult]:
        """
        住所文字列から位置情報を取得

        Args:
            query: 住所や地名

        Returns:
            Optional[LocationResult]: 位置情報（見つからない場合はNone）
        """
        result = await self.geocoder.forward_geocode(query)
        if result is None:
            return None

        return LocationResult(
            coordinate=result.coordinate,
            address=result.display_name,
            labels=extract_labels(result.address),
        )

    async def locate(self, point: Coordinate) -> LocationResult:
        """
        座標から住所と daerah / mukim を取得

        逆ジオコーディングに失敗しても座標だけの結果を返す

        Args:
            point: 座標

        Returns:
            LocationResult: 位置情報
        """
        result = await self.geocoder.reverse_geocode(point)
        if result is None:
            return LocationResult(coordinate=point)

        return LocationResult(
            coordinate=point,
            address=result.display_name,
            labels=extract_labels(result.address),
        )

    async def resolve_address(self, entry: AddressEntry) -> AddressResolution:
        """
        申請住所を座標に変換（Nominatim → 地名辞書の順）

        Args:
            entry: 申請住所

        Returns:
            AddressResolution: 変換結果
        """
        await self.rate_limiter.wait()
        location = await self.search(entry.address)
        if location is not None:
            return AddressResolution(entry=entry, source=ResolutionSource.NOMINATIM, location=location)

        coordinate = self.matcher.match(entry.address, mukim=entry.mukim, daerah=entry.daerah)
        if coordinate is not None:
            logger.debug(f"Resolved {entry.ref} from gazetteer")
            return AddressResolution(
                entry=entry,
                source=ResolutionSource.GAZETTEER,
                location=LocationResult(
                    coordinate=coordinate,
                    address=entry.address,
                    labels=SubdivisionLabels(district=entry.daerah, sub_district=entry.mukim),
                ),
            )

        logger.warning(f"Failed to resolve address for {entry.ref}")
        return AddressResolution(entry=entry, source=ResolutionSource.UNRESOLVED)

    async def resolve_addresses(
        self, entries: Iterable[AddressEntry], show_progress: bool = True
    ) -> tuple[list[AddressResolution], dict[str, int]]:
        """
        複数の申請住所をバッチ変換

        Args:
            entries: 申請住所のリスト
            show_progress: プログレスバーを表示するか

        Returns:
            tuple[list[AddressResolution], dict[str, int]]: 結果と件数（取得元別・失敗・合計）
        """
        entries = list(entries)
        results: list[AddressResolution] = []

        logger.info(f"Starting batch address resolution: {len(entries)} entries")

        iterator = tqdm(entries, desc="ジオコーディング") if show_progress else entries

        for entry in iterator:
            results.append(await self.resolve_address(entry))

        stats = {
            "nominatim": sum(1 for r in results if r.source is ResolutionSource.NOMINATIM),
            "gazetteer": sum(1 for r in results if r.source is ResolutionSource.GAZETTEER),
            "unresolved": sum(1 for r in results if r.source is ResolutionSource.UNRESOLVED),
            "total": len(results),
        }

        logger.info(
            f"Batch address resolution completed: {stats['nominatim']} nominatim, "
            f"{stats['gazetteer']} gazetteer, {stats['unresolved']} unresolved"
        )

        return results, stats

    def get_cache_stats(self) -> Optional[dict[str, float]]:
        """
        キャッシュ統計を取得（CacheGeocoderを使用している場合のみ）
        """
        if isinstance(self.geocoder, CacheGeocoder):
            return self.geocoder.get_cache_stats()

        logger.warning("Cache stats are only available when using CacheGeocoder")
        return None

    def clear_cache(self) -> None:
        """キャッシュをクリア（CacheGeocoderを使用している場合のみ）"""
        if isinstance(self.geocoder, CacheGeocoder):
            self.geocoder.clear_cache()
        else:
            logger.warning("Cache clearing is only supported when using CacheGeocoder")
