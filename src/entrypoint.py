"""CLIエントリーポイント"""
import argparse
import asyncio
import json
import sys
from typing import Any, Optional

from .features.batch.orchestrator import LocationOrchestrator
from .features.geocoding.domain.models import Coordinate
from .infrastructure.config.settings import Settings, load_settings
from .shared.exceptions.errors import LocationError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hulu Selangor 申請位置の解決ツール（ジオコーディング・境界判定）"
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    geocode = subparsers.add_parser("geocode", help="住所から座標と daerah / mukim を取得")
    geocode.add_argument("query", type=str, help="住所や地名")

    reverse = subparsers.add_parser("reverse", help="座標から住所と daerah / mukim を取得")
    reverse.add_argument("lat", type=float, help="緯度")
    reverse.add_argument("lon", type=float, help="経度")

    check = subparsers.add_parser("check", help="座標がサービス区域内か判定")
    check.add_argument("lat", type=float, help="緯度")
    check.add_argument("lon", type=float, help="経度")

    batch = subparsers.add_parser("batch", help="申請住所CSVを座標化してKMLを出力")
    batch.add_argument("csv", type=str, help="入力CSV（列: ref,address[,mukim,daerah]）")
    batch.add_argument("--kml", type=str, help="KMLの出力先")
    batch.add_argument("--no-progress", action="store_true", help="プログレスバーを表示しない")

    return parser


async def run_command(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    """
    サブコマンドを実行して表示用の辞書を返す

    Raises:
        ValueError: 座標が範囲外の場合
    """
    orchestrator = LocationOrchestrator(settings)

    try:
        if args.command == "geocode":
            location = await orchestrator.geocoding_service.search(args.query)
            return {"query": args.query, "result": location.to_dict() if location else None}

        if args.command == "reverse":
            point = Coordinate(lat=args.lat, lon=args.lon)
            location = await orchestrator.geocoding_service.locate(point)
            return location.to_dict()

        if args.command == "check":
            point = Coordinate(lat=args.lat, lon=args.lon)
            verdict = await orchestrator.validation_service.check(point)
            return {"lat": point.lat, "lon": point.lon, "verdict": verdict.value}

        result = await orchestrator.run_address_batch(
            args.csv, kml_path=args.kml, show_progress=not args.no_progress
        )
        return {
            "stats": result.stats,
            "kml": str(result.kml_path) if result.kml_path else None,
        }

    finally:
        await orchestrator.close()


def main(argv: Optional[list[str]] = None) -> int:
    """
    メインエントリーポイント

    Returns:
        int: 終了コード（0: 成功, 1: 失敗, 2: 入力エラー）
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)

        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(level=settings.log_level)

        output = asyncio.run(run_command(args, settings))
        print(json.dumps(output, ensure_ascii=False, indent=2))
        return 0

    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 2
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # SIGINT
    except (LocationError, OSError) as e:
        logger.error(f"Command failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
