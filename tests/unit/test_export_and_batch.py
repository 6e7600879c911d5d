"""KMLエクスポートとバッチジョブのテスト"""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from src.features.batch.jobs.address_batch_job import AddressBatchJob, read_address_csv
from src.features.boundary.domain.models import BoundaryGeometry, ContainmentVerdict, Polygon
from src.features.boundary.providers.boundary_cache import BoundaryCache
from src.features.boundary.services.boundary_service import BoundaryValidationService
from src.features.export.kml_exporter import (
    KML_NAMESPACE,
    UNASSIGNED_LABEL,
    Placemark,
    export_kml,
    generate_kml,
)
from src.features.geocoding.domain.models import (
    Coordinate,
    ForwardGeocodeResult,
    LocationResult,
    SubdivisionLabels,
)
from src.features.geocoding.providers.location_matcher import LocationMatcher
from src.features.geocoding.services.geocoding_service import GeocodingService
from src.shared.exceptions.errors import ValidationError
from src.shared.http.rate_limiter import RateLimiter
from tests.conftest import coordinate_ring
from tests.unit.test_geocoding import FakeGeocoder

NS = {"kml": KML_NAMESPACE}


def parse(kml: str) -> ET.Element:
    return ET.fromstring(kml.encode("utf-8"))


def test_generate_kml_groups_by_labels() -> None:
    placemarks = [
        Placemark(
            name="OKU-001",
            location=LocationResult(
                coordinate=Coordinate(lat=3.5667, lon=101.65),
                address="Kuala Kubu Bharu",
                labels=SubdivisionLabels(district="Hulu Selangor", sub_district="Kuala Kubu Bharu"),
            ),
        ),
        Placemark(
            name="OKU-002",
            location=LocationResult(coordinate=Coordinate(lat=3.5, lon=101.5333)),
            description="Tiada alamat",
        ),
        Placemark(
            name="OKU-003",
            location=LocationResult(
                coordinate=Coordinate(lat=3.57, lon=101.66),
                labels=SubdivisionLabels(district="Hulu Selangor", sub_district="Kuala Kubu Bharu"),
            ),
        ),
    ]

    kml = generate_kml(placemarks, document_name="Ujian")

    assert kml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    root = parse(kml)
    assert root.find("kml:Document/kml:name", NS).text == "Ujian"

    folders = root.findall("kml:Document/kml:Folder", NS)
    assert [folder.find("kml:name", NS).text for folder in folders] == [
        "Hulu Selangor - Kuala Kubu Bharu",
        f"{UNASSIGNED_LABEL} - {UNASSIGNED_LABEL}",
    ]

    first_folder = folders[0].findall("kml:Placemark", NS)
    assert [p.find("kml:name", NS).text for p in first_folder] == ["OKU-001", "OKU-003"]
    assert first_folder[0].find("kml:description", NS).text == "Kuala Kubu Bharu"
    assert first_folder[1].find("kml:description", NS) is None
    assert first_folder[0].find("kml:Point/kml:coordinates", NS).text == "101.65,3.5667,0"

    unassigned = folders[1].find("kml:Placemark", NS)
    assert unassigned.find("kml:description", NS).text == "Tiada alamat"


def test_export_kml_writes_file(tmp_path: Path) -> None:
    output = export_kml(
        tmp_path / "out" / "applications.kml",
        [Placemark(name="A", location=LocationResult(coordinate=Coordinate(lat=1, lon=2)))],
    )

    assert output.exists()
    root = parse(output.read_text(encoding="utf-8"))
    assert len(root.findall(".//kml:Placemark", NS)) == 1


def write_csv(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8-sig")
    return path


def test_read_address_csv(tmp_path: Path) -> None:
    path = write_csv(
        tmp_path / "applications.csv",
        "ref,address,mukim,daerah\n"
        'OKU-001,"  Jalan Besar,   Kuala Kubu Bharu ",Kuala Kubu Bharu,Hulu Selangor\n'
        ",no ref,,\n"
        "OKU-002,,,\n"
        "OKU-003,Lot 5 Rasa,,\n",
    )

    entries = read_address_csv(path)

    assert [entry.ref for entry in entries] == ["OKU-001", "OKU-003"]
    assert entries[0].address == "Jalan Besar, Kuala Kubu Bharu"
    assert entries[0].mukim == "Kuala Kubu Bharu"
    assert entries[0].daerah == "Hulu Selangor"
    assert entries[1].mukim is None


def test_read_address_csv_requires_columns(tmp_path: Path) -> None:
    path = write_csv(tmp_path / "bad.csv", "id,alamat\n1,Rasa\n")

    with pytest.raises(ValidationError):
        read_address_csv(path)


class StaticLoader:
    def __init__(self, geometry: BoundaryGeometry) -> None:
        self.geometry = geometry

    async def load(self, source: str) -> BoundaryGeometry:
        return self.geometry


@pytest.mark.asyncio
async def test_address_batch_job(tmp_path: Path) -> None:
    inside = Coordinate(lat=3.5, lon=101.6)
    outside = Coordinate(lat=3.1, lon=101.7)
    geocoder = FakeGeocoder(
        forward={
            "Jalan Besar, Kuala Kubu Bharu": ForwardGeocodeResult(
                coordinate=inside, address={"county": "Hulu Selangor", "town": "Kuala Kubu Bharu"}
            ),
            "Jalan Ampang, Kuala Lumpur": ForwardGeocodeResult(coordinate=outside),
        }
    )
    service = GeocodingService(
        geocoder, matcher=LocationMatcher(jitter=False), rate_limiter=RateLimiter(min_interval=0)
    )
    boundary = BoundaryGeometry(
        parts=(
            Polygon(
                outer=coordinate_ring([(3.3, 101.4), (3.3, 101.8), (3.8, 101.8), (3.8, 101.4)])
            ),
        )
    )
    validation = BoundaryValidationService(BoundaryCache(StaticLoader(boundary)), "boundary")
    entries = read_address_csv(
        write_csv(
            tmp_path / "applications.csv",
            "ref,address,mukim,daerah\n"
            'OKU-001,"Jalan Besar, Kuala Kubu Bharu",,\n'
            'OKU-002,"Jalan Ampang, Kuala Lumpur",,\n'
            "OKU-003,Lot 7 tanpa nama,Rasa,Hulu Selangor\n"
            "OKU-004,Lot 8 tanpa nama,,Gombak\n",
        )
    )

    result = await AddressBatchJob(service, validation).execute(
        entries, kml_path=tmp_path / "applications.kml", show_progress=False
    )

    assert result.stats == {
        "nominatim": 2,
        "gazetteer": 1,
        "unresolved": 1,
        "total": 4,
        "outside": 1,
    }
    assert result.verdicts == {
        "OKU-001": ContainmentVerdict.INSIDE,
        "OKU-002": ContainmentVerdict.OUTSIDE,
        "OKU-003": ContainmentVerdict.INSIDE,
    }

    root = parse(result.kml_path.read_text(encoding="utf-8"))
    names = [node.text for node in root.findall(".//kml:Placemark/kml:name", NS)]
    assert sorted(names) == ["OKU-001", "OKU-002", "OKU-003"]
