"""インメモリの地図描画面（ヘッドレス・決定的）"""
from typing import Optional

from ....shared.logging.config import get_logger
from ...geocoding.domain.models import Coordinate
from .base import MapSurface, PositionHandler

logger = get_logger(__name__)


class InMemoryMapSurface(MapSurface):
    """
    描画しない地図描画面

    状態を属性として保持し、click() / drag_marker_to() で
    ユーザー操作を再現できる
    """

    def __init__(self) -> None:
        self.created = False
        self.destroyed = False
        self.center: Optional[Coordinate] = None
        self.zoom: Optional[int] = None
        self.height: Optional[int] = None
        self.marker: Optional[Coordinate] = None
        self.marker_draggable = False
        self.warning: Optional[tuple[Coordinate, str]] = None
        self._marker_handlers: list[PositionHandler] = []
        self._click_handlers: list[PositionHandler] = []

    def create(self, center: Coordinate, zoom: int, height: int) -> None:
        self.created = True
        self.center = center
        self.zoom = zoom
        self.height = height
        logger.debug(f"Surface created: center={center.to_tuple()}, zoom={zoom}")

    def add_marker(self, position: Coordinate, draggable: bool = True) -> None:
        self.marker = position
        self.marker_draggable = draggable

    def move_marker(self, position: Coordinate) -> None:
        self.marker = position

    def on_marker_moved(self, handler: PositionHandler) -> None:
        self._marker_handlers.append(handler)

    def on_surface_clicked(self, handler: PositionHandler) -> None:
        self._click_handlers.append(handler)

    def show_warning(self, position: Coordinate, message: str) -> None:
        self.warning = (position, message)

    def hide_warning(self) -> None:
        self.warning = None

    def destroy(self) -> None:
        self._marker_handlers.clear()
        self._click_handlers.clear()
        self.warning = None
        self.destroyed = True
        logger.debug("Surface destroyed")

    @property
    def listener_count(self) -> int:
        return len(self._marker_handlers) + len(self._click_handlers)

    def click(self, position: Coordinate) -> None:
        """地図のクリック/タップを再現"""
        for handler in list(self._click_handlers):
            handler(position)

    def drag_marker_to(self, position: Coordinate) -> None:
        """マーカーのドラッグ終了を再現（マーカーは先に移動する）"""
        if self.marker is None:
            return
        self.marker = position
        for handler in list(self._marker_handlers):
            handler(position)
