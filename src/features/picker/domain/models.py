"""地図ピッカーのドメインモデル"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...geocoding.domain.models import Coordinate

# 座標未指定時の初期位置（Kuala Kubu Bharu の町の中心）
DEFAULT_CENTER = Coordinate(lat=3.5547, lon=101.6463)
DEFAULT_ZOOM = 10
FOCUSED_ZOOM = 15
DEFAULT_HEIGHT = 320

DEFAULT_WARNING_MESSAGE = "Lokasi di luar kawasan Hulu Selangor."

# 地図の使い方（フォームに表示する説明文）
INSTRUCTIONS: tuple[str, ...] = (
    "Klik/Sentuh pada peta untuk meletakkan pin di lokasi tersebut",
    "Seret pin untuk menggerakkan ke lokasi yang tepat",
    "Gunakan butang +/- atau cubit untuk zum masuk/keluar",
    "Alamat akan diisi secara berasingan di ruangan alamat di atas",
)


class PickerState(str, Enum):
    """地図ピッカーの状態"""

    UNINITIALIZED = "uninitialized"  # 地図未作成
    READY = "ready"  # マーカー配置済み、待機中
    UPDATING = "updating"  # 逆ジオコーディング実行中
    DESTROYED = "destroyed"  # 破棄済み（以降コールバックなし）


@dataclass
class PickerOptions:
    """呼び出し元（フォーム）から渡される入力"""

    position: Optional[Coordinate] = None  # 現在の座標（未指定なら町の中心）
    invalid: bool = False  # 境界外の警告を表示するか
    show_instructions: bool = True  # 使い方を表示するか
    height: int = DEFAULT_HEIGHT  # 地図の高さ（px）
