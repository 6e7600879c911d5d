"""位置情報のKMLエクスポート（daerah / mukim 別フォルダ）"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from ...shared.logging.config import get_logger
from ..geocoding.domain.models import LocationResult

logger = get_logger(__name__)

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
UNASSIGNED_LABEL = "Tidak Ditetapkan"
DEFAULT_DOCUMENT_NAME = "MPHS OKU Applications"

ET.register_namespace("", KML_NAMESPACE)


@dataclass(frozen=True)
class Placemark:
    """KMLに書き出す1地点"""

    name: str
    location: LocationResult
    description: Optional[str] = None

    @property
    def folder_key(self) -> tuple[str, str]:
        return (
            self.location.district or UNASSIGNED_LABEL,
            self.location.sub_district or UNASSIGNED_LABEL,
        )


def _element(parent: ET.Element, tag: str, text: Optional[str] = None) -> ET.Element:
    child = ET.SubElement(parent, f"{{{KML_NAMESPACE}}}{tag}")
    if text is not None:
        child.text = text
    return child


def generate_kml(placemarks: Iterable[Placemark], document_name: str = DEFAULT_DOCUMENT_NAME) -> str:
    """
    KML 2.2 文書を生成

    地点は「daerah - mukim」のフォルダにまとめる（出現順）。
    ラベルがない場合は Tidak Ditetapkan とする

    Args:
        placemarks: 地点のリスト
        document_name: 文書名

    Returns:
        str: KML文字列
    """
    groups: dict[tuple[str, str], list[Placemark]] = {}
    for placemark in placemarks:
        groups.setdefault(placemark.folder_key, []).append(placemark)

    root = ET.Element(f"{{{KML_NAMESPACE}}}kml")
    document = _element(root, "Document")
    _element(document, "name", document_name)

    for (district, sub_district), members in groups.items():
        folder = _element(document, "Folder")
        _element(folder, "name", f"{district} - {sub_district}")

        for placemark in members:
            node = _element(folder, "Placemark")
            _element(node, "name", placemark.name)

            description = placemark.description
            if description is None and placemark.location.address:
                description = placemark.location.address
            if description is not None:
                _element(node, "description", description)

            coordinate = placemark.location.coordinate
            point = _element(node, "Point")
            # KMLは 経度,緯度,高度 の順
            _element(point, "coordinates", f"{coordinate.lon},{coordinate.lat},0")

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")

    logger.debug(f"KML generated: {len(groups)} folders")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"


def export_kml(
    path: Union[str, Path],
    placemarks: Iterable[Placemark],
    document_name: str = DEFAULT_DOCUMENT_NAME,
) -> Path:
    """
    KMLファイルに書き出す

    Returns:
        Path: 書き出したファイルのパス
    """
    placemarks = list(placemarks)
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(generate_kml(placemarks, document_name), encoding="utf-8")

    logger.info(f"KML exported: {output} ({len(placemarks)} placemarks)")
    return output
