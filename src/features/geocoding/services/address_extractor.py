"""Nominatimの住所レコードから daerah / mukim を取り出す"""
from typing import Mapping, Optional

from ..domain.models import SubdivisionLabels

# 既存データとの互換性のため優先順位は固定
DISTRICT_KEYS: tuple[str, ...] = ("county", "district", "region")
SUB_DISTRICT_KEYS: tuple[str, ...] = ("suburb", "town", "village", "municipality")


def _first_present(record: Mapping[str, object], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def extract_labels(record: Optional[Mapping[str, object]]) -> SubdivisionLabels:
    """
    住所レコードから行政区画ラベルを抽出

    - daerah: county → district → region
    - mukim: suburb → town → village → municipality

    Args:
        record: 逆ジオコーディング等で得た address オブジェクト（None可）

    Returns:
        SubdivisionLabels: 見つからないラベルは None
    """
    if not record:
        return SubdivisionLabels()

    return SubdivisionLabels(
        district=_first_present(record, DISTRICT_KEYS),
        sub_district=_first_present(record, SUB_DISTRICT_KEYS),
    )
