"""ソースコードスキャナーの基本定義

スキャナーは次の2つの機能を持つオブジェクトです。

- ``target(path)``: そのファイルを扱うかどうか（通常は拡張子で判定）
- ``parse(path)``: 抽出した翻訳対象文字列（RawMessage）の列をソース順に返す

SourceScanner を継承したスキャナーの場合、ファイルの読み込みとデコードは
抽出パイプライン側で行い、デコード済みのテキストが ``scan`` に渡されます。
"""

from __future__ import annotations

import abc
import os
import re
from os import PathLike
from typing import Any, List, Mapping, Optional, Pattern, Protocol, Sequence, Tuple, Union, runtime_checkable

from pydantic import BaseModel

from pokit.errors import EncodingError

PathType = Union[str, PathLike[str]]

TRANSLATORS_TAG = "TRANSLATORS:"


class RawMessage(BaseModel):
    """スキャナーが抽出した1件の文字列"""

    msgid: str
    msgid_plural: Optional[str] = None
    msgctxt: Optional[str] = None
    line: int
    extracted_comment: Optional[str] = None


RawRecord = Union[RawMessage, Mapping[str, Any]]


@runtime_checkable
class Scanner(Protocol):
    """スキャナーのインターフェース"""

    def target(self, path: str) -> bool: ...

    def parse(self, path: str) -> Sequence[RawRecord]: ...


def decode_source(path: PathType, data: bytes, encoding: str) -> str:
    """ソースファイルの内容をデコードします。

    Raises:
        EncodingError: 不明なエンコーディング、またはデコードに失敗した場合
    """
    try:
        return data.decode(encoding)
    except LookupError as e:
        raise EncodingError(os.fspath(path), encoding, "unknown encoding") from e
    except UnicodeDecodeError as e:
        raise EncodingError(os.fspath(path), encoding, str(e)) from e


class SourceScanner(abc.ABC):
    """テキストのソースファイルを扱うスキャナーの基底クラス

    Note:
        - extensions に一致するファイルを対象とします
        - 先頭2行までのマジックコメントで宣言されたエンコーディングを検出します
    """

    extensions: Tuple[str, ...] = ()
    coding_pattern: Pattern[bytes] = re.compile(rb"^[ \t\f]*#.*?coding[:=][ \t]*([-\w.]+)")
    default_encoding = "utf-8"

    def target(self, path: PathType) -> bool:
        return os.fspath(path).lower().endswith(self.extensions)

    def detect_encoding(self, data: bytes) -> Optional[str]:
        """マジックコメントからエンコーディングを検出します。"""
        for line in data.split(b"\n", 2)[:2]:
            match = self.coding_pattern.search(line)
            if match is not None:
                return match.group(1).decode("ascii")
        return None

    def parse(self, path: PathType) -> List[RawMessage]:
        with open(path, "rb") as f:
            data = f.read()
        encoding = self.detect_encoding(data) or self.default_encoding
        return self.scan(decode_source(path, data, encoding), os.fspath(path))

    @abc.abstractmethod
    def scan(self, text: str, path: str) -> List[RawMessage]:
        """デコード済みのテキストから文字列を抽出します。"""


def translator_comment_above(lines: Sequence[str], lineno: int, prefix: str = "#") -> Optional[str]:
    """呼び出し行の直前にある ``TRANSLATORS:`` コメントを取り出します。

    Args:
        lines: ソースの行のリスト
        lineno: 呼び出しのある行番号（1始まり）
        prefix: コメントの開始文字

    Returns:
        ``TRANSLATORS:`` から始まるコメント行を改行で連結したもの。なければ None
    """
    block: List[str] = []
    index = lineno - 2
    while index >= 0:
        stripped = lines[index].strip()
        if not stripped.startswith(prefix):
            break
        block.insert(0, stripped[len(prefix):].strip())
        index -= 1

    for i, line in enumerate(block):
        if line.startswith(TRANSLATORS_TAG):
            return "\n".join(block[i:])
    return None
