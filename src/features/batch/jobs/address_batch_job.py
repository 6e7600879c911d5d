"""申請住所のバッチ座標化ジョブ（CSV → KML）"""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ....shared.exceptions.errors import ValidationError
from ....shared.logging.config import get_logger
from ....shared.utils.text import normalize_text
from ...boundary.domain.models import ContainmentVerdict
from ...boundary.services.boundary_service import BoundaryValidationService
from ...export.kml_exporter import Placemark, export_kml
from ...geocoding.domain.models import AddressEntry, AddressResolution
from ...geocoding.services.geocoding_service import GeocodingService

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("ref", "address")


def read_address_csv(path: Union[str, Path]) -> list[AddressEntry]:
    """
    申請住所CSVを読み込む

    必須列: ref, address / 任意列: mukim, daerah

    Raises:
        ValidationError: 必須列がない場合
    """
    entries: list[AddressEntry] = []

    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        missing = [column for column in REQUIRED_COLUMNS if column not in (reader.fieldnames or [])]
        if missing:
            raise ValidationError(f"CSV is missing required columns: {', '.join(missing)}")

        for line_number, row in enumerate(reader, start=2):
            ref = normalize_text(row.get("ref"))
            address = normalize_text(row.get("address"))
            if not ref or not address:
                logger.warning(f"Skipping CSV line {line_number}: ref/address is empty")
                continue

            entries.append(
                AddressEntry(
                    ref=ref,
                    address=address,
                    mukim=normalize_text(row.get("mukim")),
                    daerah=normalize_text(row.get("daerah")),
                )
            )

    logger.info(f"Loaded {len(entries)} address entries from {path}")
    return entries


@dataclass
class AddressBatchResult:
    """バッチジョブの結果"""

    resolutions: list[AddressResolution] = field(default_factory=list)
    verdicts: dict[str, ContainmentVerdict] = field(default_factory=dict)  # ref → 判定
    stats: dict[str, int] = field(default_factory=dict)
    kml_path: Optional[Path] = None


class AddressBatchJob:
    """住所の座標化・境界判定・KML出力をまとめて行うジョブ"""

    def __init__(
        self,
        geocoding_service: GeocodingService,
        validation_service: Optional[BoundaryValidationService] = None,
    ) -> None:
        """
        Args:
            geocoding_service: ジオコーディングサービス
            validation_service: 境界判定サービス（オプション）
        """
        self.geocoding_service = geocoding_service
        self.validation_service = validation_service

    async def execute(
        self,
        entries: list[AddressEntry],
        kml_path: Optional[Union[str, Path]] = None,
        show_progress: bool = True,
    ) -> AddressBatchResult:
        """
        ジョブを実行

        Args:
            entries: 申請住所
            kml_path: KMLの出力先（Noneの場合は出力しない）
            show_progress: プログレスバーを表示するか

        Returns:
            AddressBatchResult: 結果
        """
        resolutions, stats = await self.geocoding_service.resolve_addresses(
            entries, show_progress=show_progress
        )
        result = AddressBatchResult(resolutions=resolutions, stats=dict(stats))

        if self.validation_service is not None:
            outside = 0
            for resolution in resolutions:
                if resolution.location is None:
                    continue
                verdict = await self.validation_service.check(resolution.location.coordinate)
                result.verdicts[resolution.entry.ref] = verdict
                if verdict is ContainmentVerdict.OUTSIDE:
                    outside += 1
            result.stats["outside"] = outside
            logger.info(f"Boundary check completed: {outside} outside the service area")

        if kml_path is not None:
            placemarks = [
                Placemark(name=resolution.entry.ref, location=resolution.location)
                for resolution in resolutions
                if resolution.location is not None
            ]
            result.kml_path = export_kml(kml_path, placemarks)

        return result
