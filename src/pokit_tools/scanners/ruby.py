"""Rubyソースのスキャナー

``_("...")``、``n_("...", "...", n)``、``p_("context", "...")`` などの
gettext 呼び出しのうち、引数が文字列リテラルのものを抽出します。
"""

from __future__ import annotations

import re
from typing import Dict, Iterator, List, Optional, Tuple

from .base import RawMessage, SourceScanner, translator_comment_above

# 関数名 -> 引数の役割
KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "_": ("msgid",),
    "N_": ("msgid",),
    "s_": ("msgid",),
    "gettext": ("msgid",),
    "n_": ("msgid", "msgid_plural"),
    "Nn_": ("msgid", "msgid_plural"),
    "ns_": ("msgid", "msgid_plural"),
    "ngettext": ("msgid", "msgid_plural"),
    "p_": ("msgctxt", "msgid"),
    "pgettext": ("msgctxt", "msgid"),
    "np_": ("msgctxt", "msgid", "msgid_plural"),
    "npgettext": ("msgctxt", "msgid", "msgid_plural"),
}

CALL_PATTERN = re.compile(
    r"(?<![\w.:@$])("
    + "|".join(sorted((re.escape(name) for name in KEYWORDS), key=len, reverse=True))
    + r")\s*\(\s*"
)

DOUBLE_QUOTE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "e": "\x1b", "s": " "}


def read_string_literal(text: str, pos: int) -> Optional[Tuple[str, int]]:
    """pos から始まる文字列リテラルを読み取ります。

    Returns:
        (文字列の値, リテラル直後の位置)。文字列リテラルでない場合は None
    """
    if pos >= len(text) or text[pos] not in "\"'":
        return None
    quote = text[pos]
    chars: List[str] = []
    i = pos + 1
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            following = text[i + 1]
            if quote == '"':
                chars.append(DOUBLE_QUOTE_ESCAPES.get(following, following))
            elif following in "\\'":
                chars.append(following)
            else:
                chars.append(char + following)
            i += 2
            continue
        if char == quote:
            return "".join(chars), i + 1
        if quote == '"' and text.startswith("#{", i):
            # 式展開を含む文字列は翻訳対象にしない
            return None
        chars.append(char)
        i += 1
    return None


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t\r\n":
        pos += 1
    return pos


def read_call_arguments(text: str, pos: int, count: int) -> Optional[List[str]]:
    """呼び出しの先頭 count 個の文字列リテラル引数を読み取ります。

    Note:
        隣接するリテラルの ``+`` による連結にも対応します。
    """
    arguments: List[str] = []
    while len(arguments) < count:
        pos = _skip_space(text, pos)
        literal = read_string_literal(text, pos)
        if literal is None:
            return None
        value, pos = literal
        pos = _skip_space(text, pos)
        while pos < len(text) and text[pos] == "+":
            literal = read_string_literal(text, _skip_space(text, pos + 1))
            if literal is None:
                return None
            more, pos = literal
            value += more
            pos = _skip_space(text, pos)
        arguments.append(value)

        if pos >= len(text):
            return None
        if len(arguments) < count:
            if text[pos] != ",":
                return None
            pos += 1
        elif text[pos] not in ",)":
            return None
    return arguments


def find_calls(text: str) -> Iterator[Tuple[int, str, List[str]]]:
    """テキスト中の gettext 呼び出しを (位置, 関数名, 引数) の順に返します。"""
    for match in CALL_PATTERN.finditer(text):
        name = match.group(1)
        arguments = read_call_arguments(text, match.end(), len(KEYWORDS[name]))
        if arguments is not None:
            yield match.start(), name, arguments


def build_message(name: str, arguments: List[str], line: int, comment: Optional[str]) -> RawMessage:
    fields = dict(zip(KEYWORDS[name], arguments))
    return RawMessage(
        msgid=fields["msgid"],
        msgid_plural=fields.get("msgid_plural"),
        msgctxt=fields.get("msgctxt"),
        line=line,
        extracted_comment=comment,
    )


class RubyScanner(SourceScanner):
    """Rubyソースのスキャナー"""

    extensions = (".rb",)

    def scan(self, text: str, path: str) -> List[RawMessage]:
        lines = text.split("\n")
        messages: List[RawMessage] = []
        for position, name, arguments in find_calls(text):
            line = text.count("\n", 0, position) + 1
            if lines[line - 1].lstrip().startswith("#"):
                continue
            comment = translator_comment_above(lines, line)
            messages.append(build_message(name, arguments, line, comment))
        return messages
