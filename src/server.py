"""HTTPサーバー（FastAPI）"""
from typing import Any, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .features.batch.orchestrator import LocationOrchestrator
from .features.boundary.domain.models import ContainmentVerdict
from .features.geocoding.domain.models import Coordinate
from .infrastructure.config.settings import Settings, load_settings
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    settings: Settings,
    orchestrator: Optional[LocationOrchestrator] = None,
) -> FastAPI:
    """
    FastAPIアプリケーションを作成

    Args:
        settings: アプリケーション設定
        orchestrator: オーケストレーター（Noneの場合は起動時に作成）
    """
    app = FastAPI(
        title="Hulu Selangor 位置情報サービス",
        description="申請位置のジオコーディング・daerah/mukim抽出・サービス区域判定",
        version="1.0.0",
    )

    @app.on_event("startup")
    async def startup_event() -> None:
        """起動時の処理"""
        app.state.orchestrator = orchestrator or LocationOrchestrator(settings)
        logger.info("Application starting up")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Boundary source: {settings.boundary_geojson_url or 'Not set'}")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        """シャットダウン時の処理"""
        await app.state.orchestrator.close()
        logger.info("Application shutting down")

    @app.get("/")
    async def root() -> dict[str, Any]:
        """ルートエンドポイント"""
        return {
            "service": settings.project_name,
            "version": "1.0.0",
            "status": "running",
            "environment": settings.environment,
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """ヘルスチェックエンドポイント"""
        return {"status": "healthy"}

    @app.get("/geocode")
    async def geocode(request: Request, q: str = Query(..., description="住所や地名")) -> dict[str, Any]:
        """住所検索（3文字未満は検索しない）"""
        location = await request.app.state.orchestrator.geocoding_service.search(q)
        return {"query": q, "result": location.to_dict() if location else None}

    @app.get("/reverse")
    async def reverse(
        request: Request,
        lat: float = Query(..., ge=-90, le=90),
        lon: float = Query(..., ge=-180, le=180),
    ) -> dict[str, Any]:
        """逆ジオコーディング（失敗時は座標のみ返す）"""
        location = await request.app.state.orchestrator.geocoding_service.locate(
            Coordinate(lat=lat, lon=lon)
        )
        return location.to_dict()

    @app.get("/boundary/check")
    async def boundary_check(
        request: Request,
        lat: float = Query(..., ge=-90, le=90),
        lon: float = Query(..., ge=-180, le=180),
    ) -> dict[str, Any]:
        """サービス区域の境界内判定"""
        verdict = await request.app.state.orchestrator.validation_service.check(
            Coordinate(lat=lat, lon=lon)
        )
        response: dict[str, Any] = {
            "lat": lat,
            "lon": lon,
            "verdict": verdict.value,
            "inside": verdict.is_inside,
        }
        if verdict is ContainmentVerdict.OUTSIDE:
            response["message"] = settings.outside_warning_message
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """グローバル例外ハンドラー"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        content = {"message": "Internal server error"}
        # 本番環境では例外の内容を返さない
        if not settings.is_production:
            content["detail"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return app


if __name__ == "__main__":
    import uvicorn

    server_settings = load_settings()
    setup_logging(level=server_settings.log_level)

    uvicorn.run(
        create_app(server_settings),
        host="0.0.0.0",
        port=server_settings.port,
        log_level=server_settings.log_level.lower(),
    )
