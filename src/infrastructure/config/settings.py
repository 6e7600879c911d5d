"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...shared.exceptions.errors import ConfigurationError


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="mphs-location-resolver",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Geocoding (Nominatim)
    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="NominatimのベースURL",
    )
    geocode_user_agent: str = Field(
        default="mphs-oku-sticker/1.0 (geocode)",
        description="住所検索（forward）で送るUser-Agent",
    )
    reverse_user_agent: str = Field(
        default="mphs-oku-sticker/1.0 (reverse)",
        description="逆ジオコーディング（reverse）で送るUser-Agent",
    )
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="外部HTTP呼び出しのタイムアウト（秒）",
    )
    geocoding_cache_enabled: bool = Field(
        default=True,
        description="ジオコーディングキャッシュを有効にするか",
    )
    geocoding_rate_limit: float = Field(
        default=1.0,
        gt=0,
        description="バッチジオコーディングのレート制限（リクエスト/秒）",
    )

    # Boundary
    boundary_geojson_url: Optional[str] = Field(
        default=None,
        description="行政境界GeoJSONのURLまたはファイルパス。未設定の場合は境界判定不可",
    )
    municipality_name: str = Field(
        default="Hulu Selangor",
        description="サービス対象の自治体名（警告メッセージに使用）",
    )

    # Map picker
    default_latitude: float = Field(
        default=3.5547,
        ge=-90,
        le=90,
        description="座標未指定時の初期緯度（町の中心）",
    )
    default_longitude: float = Field(
        default=101.6463,
        ge=-180,
        le=180,
        description="座標未指定時の初期経度（町の中心）",
    )
    default_zoom: int = Field(
        default=10,
        description="座標未指定時のズームレベル",
    )
    focused_zoom: int = Field(
        default=15,
        description="座標指定時のズームレベル",
    )
    map_height: int = Field(
        default=320,
        description="地図の高さ（px）",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # HTTP server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    @property
    def outside_warning_message(self) -> str:
        """境界外の場合に地図上へ表示する警告文"""
        return f"Lokasi di luar kawasan {self.municipality_name}."

    @property
    def is_production(self) -> bool:
        """本番環境かどうか"""
        return self.environment.lower() == "production"


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    設定を読み込む

    Args:
        env_file: 環境変数ファイルのパス（Noneの場合は環境変数のみ）

    Raises:
        ConfigurationError: 設定値が不正な場合
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
