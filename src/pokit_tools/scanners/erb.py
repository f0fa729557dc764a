"""ERBテンプレートのスキャナー

``<% %>`` / ``<%= %>`` タグ内の Ruby コードから gettext 呼び出しを抽出します。
エンコーディングは先頭行の ``<%# -*- coding: sjis -*- %>`` で宣言できます。
"""

from __future__ import annotations

import re
from typing import List, Tuple

from .base import RawMessage, SourceScanner
from .ruby import build_message, find_calls

CODE_TAG_PATTERN = re.compile(r"<%(?!#)(?!%)[-=]?(.*?)-?%>", re.DOTALL)


class ErbScanner(SourceScanner):
    """ERBテンプレートのスキャナー"""

    extensions = (".erb", ".rhtml")
    coding_pattern = re.compile(rb"<%#.*?coding[:=][ \t]*([-\w.]+)")

    def scan(self, text: str, path: str) -> List[RawMessage]:
        spans: List[Tuple[int, int]] = [
            (match.start(1), match.end(1)) for match in CODE_TAG_PATTERN.finditer(text)
        ]

        messages: List[RawMessage] = []
        for position, name, arguments in find_calls(text):
            if not any(start <= position < end for start, end in spans):
                continue
            line = text.count("\n", 0, position) + 1
            messages.append(build_message(name, arguments, line, None))
        return messages
