"""位置情報機能のオーケストレーター"""

from pathlib import Path
from typing import Optional, Union

from ...infrastructure.config.settings import Settings
from ...shared.http.client import AsyncHTTPClient
from ...shared.logging.config import get_logger
from ..boundary.providers.boundary_cache import BoundaryCache
from ..boundary.providers.geojson_loader import GeoJSONBoundaryLoader
from ..boundary.services.boundary_service import BoundaryValidationService
from ..geocoding.domain.models import Coordinate
from ..geocoding.services.geocoding_service import GeocodingService
from ..picker.domain.models import PickerOptions
from ..picker.location_picker import LocationCallback, LocationPicker
from ..picker.surfaces.base import MapSurface
from .jobs.address_batch_job import AddressBatchJob, AddressBatchResult, read_address_csv

logger = get_logger(__name__)


class LocationOrchestrator:
    """
    位置情報オーケストレーター

    各Featureを統合し、依存性注入を行う
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[AsyncHTTPClient] = None,
    ) -> None:
        """
        Args:
            settings: アプリケーション設定
            http_client: 非同期HTTPクライアント（Noneの場合は設定から作成）
        """
        self.settings = settings
        self.http_client = http_client or AsyncHTTPClient(timeout=settings.http_timeout)

        self.geocoding_service = GeocodingService.from_settings(settings, self.http_client)

        self.boundary_cache = BoundaryCache(GeoJSONBoundaryLoader(self.http_client))
        self.validation_service = BoundaryValidationService(
            self.boundary_cache, settings.boundary_geojson_url
        )

        logger.info("LocationOrchestrator initialized")

    def create_picker(
        self,
        surface: MapSurface,
        on_location_change: LocationCallback,
        options: Optional[PickerOptions] = None,
    ) -> LocationPicker:
        """設定値を反映した地図ピッカーを作成"""
        options = options or PickerOptions(height=self.settings.map_height)

        return LocationPicker(
            surface,
            self.geocoding_service,
            on_location_change,
            options=options,
            default_center=Coordinate(
                lat=self.settings.default_latitude,
                lon=self.settings.default_longitude,
            ),
            default_zoom=self.settings.default_zoom,
            focused_zoom=self.settings.focused_zoom,
            warning_message=self.settings.outside_warning_message,
        )

    async def run_address_batch(
        self,
        csv_path: Union[str, Path],
        kml_path: Optional[Union[str, Path]] = None,
        show_progress: bool = True,
    ) -> AddressBatchResult:
        """申請住所CSVを座標化し、境界判定してKMLに出力"""
        logger.info(f"Starting address batch: {csv_path}")

        entries = read_address_csv(csv_path)
        job = AddressBatchJob(self.geocoding_service, self.validation_service)
        result = await job.execute(entries, kml_path=kml_path, show_progress=show_progress)

        logger.info(f"Address batch completed: {result.stats}")
        return result

    async def close(self) -> None:
        """HTTPクライアントをクローズ"""
        await self.http_client.close()
