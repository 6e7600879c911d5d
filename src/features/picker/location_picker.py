"""地図ピッカー（マーカー位置・逆ジオコーディング・警告表示の状態管理）"""
import asyncio
from typing import Callable, Optional, Protocol

from ...shared.logging.config import get_logger
from ..geocoding.domain.models import Coordinate, LocationResult
from .domain.models import (
    DEFAULT_CENTER,
    DEFAULT_WARNING_MESSAGE,
    DEFAULT_ZOOM,
    FOCUSED_ZOOM,
    INSTRUCTIONS,
    PickerOptions,
    PickerState,
)
from .surfaces.base import MapSurface

logger = get_logger(__name__)

LocationCallback = Callable[[LocationResult], None]


class LocationResolver(Protocol):
    async def locate(self, point: Coordinate) -> LocationResult: ...


class LocationPicker:
    """
    地図描画面とジオコーディングを結び付けるピッカー

    状態遷移:
        UNINITIALIZED → READY ⇄ UPDATING → DESTROYED

    ユーザー操作（クリック/ドラッグ）毎に逆ジオコーディングを1回行う。
    応答の到着順は保証されないため、応答時点のマーカー位置と
    要求時の位置が一致しない結果は破棄する
    """

    def __init__(
        self,
        surface: MapSurface,
        resolver: LocationResolver,
        on_location_change: LocationCallback,
        options: Optional[PickerOptions] = None,
        default_center: Coordinate = DEFAULT_CENTER,
        default_zoom: int = DEFAULT_ZOOM,
        focused_zoom: int = FOCUSED_ZOOM,
        warning_message: str = DEFAULT_WARNING_MESSAGE,
    ) -> None:
        """
        Args:
            surface: 地図描画面
            resolver: 座標から LocationResult を得るもの（GeocodingService）
            on_location_change: 採用した位置情報を受け取るコールバック
            options: フォームからの入力
            default_center: 座標未指定時の初期位置
            default_zoom: 座標未指定時のズーム
            focused_zoom: 座標指定時のズーム
            warning_message: 境界外の警告文
        """
        self.surface = surface
        self.resolver = resolver
        self.on_location_change = on_location_change
        self.options = options or PickerOptions()
        self.default_center = default_center
        self.default_zoom = default_zoom
        self.focused_zoom = focused_zoom
        self.warning_message = warning_message

        self._mounted = False
        self._destroyed = False
        self._position: Optional[Coordinate] = None
        self._location: Optional[LocationResult] = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> PickerState:
        if self._destroyed:
            return PickerState.DESTROYED
        if not self._mounted:
            return PickerState.UNINITIALIZED
        if any(not task.done() for task in self._pending):
            return PickerState.UPDATING
        return PickerState.READY

    @property
    def position(self) -> Optional[Coordinate]:
        """現在のマーカー位置"""
        return self._position

    @property
    def location(self) -> Optional[LocationResult]:
        """最後に採用した位置情報"""
        return self._location

    @property
    def invalid(self) -> bool:
        return self.options.invalid

    @property
    def instructions(self) -> tuple[str, ...]:
        """表示する使い方（非表示設定なら空）"""
        return INSTRUCTIONS if self.options.show_instructions else ()

    async def mount(self) -> None:
        """
        地図を作成してマーカーを配置

        座標が渡されていない場合のみ、初期位置の住所を得るため
        逆ジオコーディングを1回行い、完了まで待つ
        """
        if self._mounted or self._destroyed:
            return

        initial = self.options.position
        use_fallback = initial is None
        position = self.default_center if initial is None else initial
        zoom = self.default_zoom if use_fallback else self.focused_zoom

        self.surface.create(position, zoom, self.options.height)
        self.surface.add_marker(position, draggable=True)
        self._position = position
        self._mounted = True

        self.surface.on_marker_moved(self._handle_marker_moved)
        self.surface.on_surface_clicked(self._handle_surface_clicked)

        if self.options.invalid:
            self.surface.show_warning(position, self.warning_message)

        logger.info(f"LocationPicker mounted at {position.to_tuple()} (fallback={use_fallback})")

        if use_fallback:
            await self._start_lookup(position)

    def set_position(self, position: Coordinate) -> None:
        """
        外部から座標を反映（逆ジオコーディングもズーム変更もしない）

        外部からの座標は住所解決済みである前提
        """
        self.options.position = position
        if not self._mounted or self._destroyed:
            return

        self._position = position
        self.surface.move_marker(position)

    def set_invalid(self, invalid: bool) -> None:
        """境界外フラグを反映し、マーカー位置に警告を表示/非表示"""
        self.options.invalid = invalid
        if not self._mounted or self._destroyed or self._position is None:
            return

        if invalid:
            self.surface.show_warning(self._position, self.warning_message)
        else:
            self.surface.hide_warning()

    async def wait_idle(self) -> None:
        """実行中の逆ジオコーディングがすべて終わるまで待つ"""
        while True:
            pending = [task for task in self._pending if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def destroy(self) -> None:
        """ハンドラーを解除して地図を破棄（以降コールバックは呼ばれない）"""
        if self._destroyed:
            return

        self._destroyed = True
        for task in self._pending:
            task.cancel()
        self._pending.clear()

        if self._mounted:
            self.surface.destroy()

        logger.info("LocationPicker destroyed")

    def _handle_surface_clicked(self, position: Coordinate) -> None:
        if self._destroyed:
            return
        self._position = position
        self.surface.move_marker(position)
        self._schedule_lookup(position)

    def _handle_marker_moved(self, position: Coordinate) -> None:
        if self._destroyed:
            return
        self._position = position
        self._schedule_lookup(position)

    def _schedule_lookup(self, position: Coordinate) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(self._lookup(position))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _start_lookup(self, position: Coordinate) -> None:
        try:
            await self._schedule_lookup(position)
        except asyncio.CancelledError:
            # destroy() による取り消しは mount() の呼び出し元に伝えない
            if not self._destroyed:
                raise
            logger.debug("Initial lookup cancelled by destroy()")

    async def _lookup(self, position: Coordinate) -> None:
        try:
            result = await self.resolver.locate(position)
        except Exception as e:
            logger.error(f"Reverse geocoding failed for {position.to_tuple()}: {e}", exc_info=True)
            return

        if self._destroyed:
            return

        # 新しい位置の要求が後から出ていれば、この応答は古い
        if position != self._position:
            logger.debug(f"Discarding stale location result for {position.to_tuple()}")
            return

        self._location = result
        try:
            self.on_location_change(result)
        except Exception as e:
            logger.error(f"Location change callback failed for {position.to_tuple()}: {e}", exc_info=True)
