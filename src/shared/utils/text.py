"""テキスト処理ユーティリティ"""

import re
from typing import Optional


def normalize_text(text: Optional[str]) -> Optional[str]:
    """
    貼り付けられたテキストを正規化

    - 全角スペース・全角カンマを半角に変換
    - 改行やタブを含む連続する空白を1つに
    - 前後の空白を除去
    """
    if not text:
        return None

    text = text.replace("\u3000", " ").replace("\uff0c", ",")

    text = re.sub(r"\s+", " ", text)

    text = text.strip()

    return text if text else None


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    テキストを指定長で切り詰め（ログ出力用）

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
