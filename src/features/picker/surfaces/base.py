"""地図描画面の抽象基底クラス"""

from abc import ABC, abstractmethod
from typing import Callable

from ...geocoding.domain.models import Coordinate

PositionHandler = Callable[[Coordinate], None]


class MapSurface(ABC):
    """
    地図描画面（Leaflet等）の抽象

    実際の地図ライブラリは実装の1つに過ぎず、テストでは
    決定的なインメモリ実装を使う
    """

    @abstractmethod
    def create(self, center: Coordinate, zoom: int, height: int) -> None:
        """
        地図を作成

        Args:
            center: 中心座標
            zoom: ズームレベル
            height: 高さ（px）
        """
        pass

    @abstractmethod
    def add_marker(self, position: Coordinate, draggable: bool = True) -> None:
        """マーカーを配置"""
        pass

    @abstractmethod
    def move_marker(self, position: Coordinate) -> None:
        """マーカーを移動（ズームは変更しない）"""
        pass

    @abstractmethod
    def on_marker_moved(self, handler: PositionHandler) -> None:
        """マーカーのドラッグ終了時のハンドラーを登録"""
        pass

    @abstractmethod
    def on_surface_clicked(self, handler: PositionHandler) -> None:
        """地図のクリック/タップ時のハンドラーを登録"""
        pass

    @abstractmethod
    def show_warning(self, position: Coordinate, message: str) -> None:
        """マーカー位置に警告を表示"""
        pass

    @abstractmethod
    def hide_warning(self) -> None:
        """警告を閉じる"""
        pass

    @abstractmethod
    def destroy(self) -> None:
        """全ハンドラーを解除して地図を破棄"""
        pass
