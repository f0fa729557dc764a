"""PO/POTテキストの出力

Catalog をPO/POTテキストに変換します。エントリの順序は挿入順のまま出力します。
"""

from __future__ import annotations

import logging
import os
from os import PathLike
from typing import List, Union

from .catalog import Catalog
from .entry import Entry

logger = logging.getLogger(__name__)

OBSOLETE_PREFIX = "#~ "


def escape(text: str) -> str:
    """PO形式の文字列リテラル用にエスケープします。"""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\t", "\\t")
        .replace("\r", "\\r")
        .replace("\n", "\\n")
        .replace("\a", "\\a")
        .replace("\b", "\\b")
        .replace("\f", "\\f")
        .replace("\v", "\\v")
    )


def _split_segments(text: str) -> List[str]:
    """改行ごとに区切った（改行を含む）部分文字列のリストを返します。"""
    # str.splitlines は \n 以外でも区切るので使わない
    if "\n" not in text:
        return [text]
    segments: List[str] = []
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            segments.append(text[start:])
            break
        segments.append(text[start : end + 1])
        start = end + 1
    return segments


def _wrap(text: str, width: int) -> List[str]:
    """エスケープ済みの文字列を空白の直後で width 以下に折り返します。"""
    chunks: List[str] = []
    while len(text) > width:
        cut = text.rfind(" ", 0, width)
        if cut <= 0:
            break
        chunks.append(text[: cut + 1])
        text = text[cut + 1 :]
    chunks.append(text)
    return chunks


class POWriter:
    """PO/POTテキストのライター

    Args:
        width: 1行の最大幅。0 の場合は折り返さない

    Note:
        - ヘッダーがある場合、ヘッダーの後には必ず空行が入ります
        - それ以外のエントリは空行で区切られます
    """

    def __init__(self, width: int = 0) -> None:
        self.width = width

    def dumps(self, catalog: Catalog) -> str:
        header = catalog.header
        blocks = [
            self.format_entry(entry) for entry in catalog if entry is not header
        ]
        if header is None:
            return "\n".join(blocks)
        return self.format_entry(header) + "\n" + "\n".join(blocks)

    def dump(
        self,
        catalog: Catalog,
        path: Union[str, PathLike[str]],
        encoding: str = "utf-8",
    ) -> None:
        """ファイルに書き出します。

        Note:
            エンコードに失敗した場合はファイルを作成しません。
        """
        data = self.dumps(catalog).encode(encoding)
        path = os.fspath(path)
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"カタログを保存しました: {path}")

    def format_entry(self, entry: Entry) -> str:
        lines: List[str] = []

        if entry.translator_comment is not None:
            for line in entry.translator_comment.split("\n"):
                lines.append(f"# {line}" if line else "#")
        if entry.extracted_comment is not None:
            for line in entry.extracted_comment.split("\n"):
                lines.append(f"#. {line}" if line else "#.")
        if entry.references:
            lines.extend(self._format_references(entry.references))
        if entry.flags:
            lines.append("#, " + ", ".join(entry.flags))
        prefix = OBSOLETE_PREFIX if entry.obsolete else ""
        if entry.previous is not None:
            marker = "#~|" if entry.obsolete else "#|"
            for line in entry.previous.split("\n"):
                lines.append(f"{marker} {line}")

        if entry.msgctxt is not None:
            lines.extend(self._format_string(prefix, "msgctxt", entry.msgctxt))
        lines.extend(self._format_string(prefix, "msgid", entry.msgid))
        if entry.is_plural:
            lines.extend(self._format_string(prefix, "msgid_plural", entry.msgid_plural or ""))
            msgstr = entry.msgstr or ["", ""]
            for index, value in enumerate(msgstr):
                lines.extend(self._format_string(prefix, f"msgstr[{index}]", value))
        else:
            msgstr = entry.msgstr or [""]
            lines.extend(self._format_string(prefix, "msgstr", msgstr[0]))

        return "\n".join(lines) + "\n"

    # ======= Private methods =======
    def _format_references(self, references: List[str]) -> List[str]:
        if self.width <= 0:
            return ["#: " + " ".join(references)]

        lines: List[str] = []
        current = "#:"
        for reference in references:
            if current != "#:" and len(current) + 1 + len(reference) > self.width:
                lines.append(current)
                current = "#:"
            current += " " + reference
        lines.append(current)
        return lines

    def _format_string(self, prefix: str, keyword: str, text: str) -> List[str]:
        segments = _split_segments(text)
        escaped = [escape(segment) for segment in segments]

        head = f"{prefix}{keyword} "
        if len(escaped) == 1:
            single = escaped[0]
            if self.width <= 0 or len(head) + len(single) + 2 <= self.width:
                return [f'{head}"{single}"']

        # 複数行になる場合は空文字列から始める
        lines = [f'{head}""']
        for segment in escaped:
            chunks = _wrap(segment, self.width - 2 - len(prefix)) if self.width > 0 else [segment]
            lines.extend(f'{prefix}"{chunk}"' for chunk in chunks)
        return lines
