"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    テキストを正規化

    - 前後の空白を除去
    - 連続する空白を1つに
    """
    if not text:
        return None

    # 連続する空白を1つに
    text = re.sub(r"\s+", " ", text)

    # 前後の空白を除去
    text = text.strip()

    return text if text else None


def normalize_address_key(address: str) -> str:
    """
    住所をキーワード照合・キャッシュキー用に正規化

    - 小文字化
    - 5桁の郵便番号（poskod）の前後に空白を入れる
    - 連続する空白を1つに
    """
    normalized = address.lower().strip()

    # "44000kuala kubu" のように区切りがない住所でも郵便番号を拾えるようにする
    normalized = re.sub(r"(\d{5})", r" \1 ", normalized)

    normalized = re.sub(r"\s+", " ", normalized)

    return normalized.strip()


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    テキストを指定長で切り詰め

    Args:
        text: 対象テキスト
        max_length: 最大文字数
        suffix: 切り詰め時の接尾辞

    Returns:
        切り詰められたテキスト
    """
    if not text or len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix
