"""Pythonソースのスキャナー

ast で ``_()``、``gettext()``、``ngettext()``、``pgettext()``、``npgettext()`` などの
呼び出しを探し、引数が文字列定数のものを抽出します。
"""

from __future__ import annotations

import ast
from typing import Dict, List, Optional, Tuple

from pokit.errors import ParseError

from .base import RawMessage, SourceScanner, translator_comment_above

KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "_": ("msgid",),
    "N_": ("msgid",),
    "gettext": ("msgid",),
    "gettext_lazy": ("msgid",),
    "gettext_noop": ("msgid",),
    "ngettext": ("msgid", "msgid_plural"),
    "ngettext_lazy": ("msgid", "msgid_plural"),
    "pgettext": ("msgctxt", "msgid"),
    "pgettext_lazy": ("msgctxt", "msgid"),
    "npgettext": ("msgctxt", "msgid", "msgid_plural"),
}


def _function_name(node: ast.Call) -> Optional[str]:
    func = node.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _string_arguments(node: ast.Call, count: int) -> Optional[List[str]]:
    if len(node.args) < count:
        return None
    values: List[str] = []
    for arg in node.args[:count]:
        if not (isinstance(arg, ast.Constant) and isinstance(arg.value, str)):
            return None
        values.append(arg.value)
    return values


class PythonScanner(SourceScanner):
    """Pythonソースのスキャナー

    Note:
        エンコーディングは PEP 263 のマジックコメントで宣言できます。
    """

    extensions = (".py",)

    def scan(self, text: str, path: str) -> List[RawMessage]:
        try:
            tree = ast.parse(text, filename=path)
        except SyntaxError as e:
            raise ParseError(path, e.lineno or 0, e.msg) from e

        lines = text.split("\n")
        found: List[Tuple[int, int, RawMessage]] = []
        for node in ast.walk(tree):
            if not isinstance(node, ast.Call):
                continue
            name = _function_name(node)
            if name not in KEYWORDS:
                continue
            roles = KEYWORDS[name]
            arguments = _string_arguments(node, len(roles))
            if arguments is None:
                continue

            fields = dict(zip(roles, arguments))
            message = RawMessage(
                msgid=fields["msgid"],
                msgid_plural=fields.get("msgid_plural"),
                msgctxt=fields.get("msgctxt"),
                line=node.lineno,
                extracted_comment=translator_comment_above(lines, node.lineno),
            )
            found.append((node.lineno, node.col_offset, message))

        # ast.walk is breadth-first
        found.sort(key=lambda item: (item[0], item[1]))
        return [message for _, _, message in found]
