"""カスタム例外定義"""


class LocationError(Exception):
    """位置情報処理の基底例外"""

    pass


class HTTPError(LocationError):
    """HTTP関連のエラー"""

    pass


class GeocodingError(LocationError):
    """ジオコーディングエラー"""

    pass


class BoundaryError(LocationError):
    """境界データ（GeoJSON）の形式エラー"""

    pass


class ConfigurationError(LocationError):
    """設定エラー"""

    pass


class ValidationError(LocationError):
    """バリデーションエラー"""

    pass
