"""例外定義モジュール

カタログの読み込み・抽出・挿入で発生する例外を定義します。
"""

from __future__ import annotations

from typing import Any, Optional


class PokitError(Exception):
    """pokitの例外の基底クラス"""


class ParseError(PokitError):
    """PO/POTテキストの構文エラー

    Args:
        path: 解析中のファイルパス
        lineno: エラーが発生した行番号（1始まり）
        message: エラー内容
    """

    def __init__(self, path: str, lineno: int, message: str) -> None:
        self.path = path
        self.lineno = lineno
        self.message = message
        super().__init__(f"{path}:{lineno}: {message}")


class EncodingError(PokitError):
    """宣言された（または既定の）エンコーディングでデコードできない"""

    def __init__(self, path: str, encoding: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.encoding = encoding
        self.reason = reason
        message = f"{path}: cannot decode as {encoding}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DuplicateKeyError(PokitError):
    """同じキーを持つ異なるエントリが挿入された"""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"duplicate message definition: {key}")
