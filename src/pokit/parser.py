"""PO/POTテキストのパーサー

行単位の状態機械でPO/POTテキストを読み込み、Catalog を構築します。
"""

from __future__ import annotations

import logging
import os
import re
from enum import Enum
from os import PathLike
from typing import List, Optional, Tuple, Union

from .catalog import Catalog
from .entry import Entry
from .errors import DuplicateKeyError, EncodingError, ParseError

logger = logging.getLogger(__name__)

KEYWORD_PATTERN = re.compile(r"^(msgctxt|msgid_plural|msgid|msgstr)(\[[^\]]*\])?\s*(.*)$")
PLURAL_INDEX_PATTERN = re.compile(r"[0-9]+")
CHARSET_PATTERN = re.compile(rb"Content-Type:[^\"\n]*charset=([\w.:-]+)")

ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

DEFAULT_ENCODING = "utf-8"
BOM = "\ufeff"


class ParserState(str, Enum):
    """パーサーの状態"""

    IDLE = "idle"
    EXPECT_MSGID = "expect_msgid"  # msgctxt の後
    EXPECT_PLURAL_OR_MSGSTR = "expect_plural_or_msgstr"  # msgid の後
    EXPECT_MSGSTR = "expect_msgstr"  # msgid_plural の後
    IN_MSGSTR = "in_msgstr"


def detect_charset(data: bytes) -> Optional[str]:
    """ヘッダーの Content-Type から charset を検出します。

    Args:
        data: デコード前のファイル内容

    Returns:
        charset 名。見つからない場合や ``CHARSET`` のままの場合は None
    """
    match = CHARSET_PATTERN.search(data)
    if match is None:
        return None
    charset = match.group(1).decode("ascii")
    if charset.upper() == "CHARSET":
        return None
    return charset


class POParser:
    """PO/POTテキストのパーサー

    Args:
        ignore_fuzzy: fuzzy フラグ付きエントリの翻訳を無視するかどうか
        report_warning: fuzzy エントリの扱いを警告として出力するかどうか
        logger: 警告の出力先。指定しない場合はモジュールのロガーを使用

    Note:
        - エラーからの回復は行いません。最初のエラーで ParseError を送出します
        - fuzzy の扱いは構文解析が完了したエントリに対する後処理です
        - ヘッダーエントリと廃止エントリは fuzzy の扱いの対象外です
    """

    def __init__(
        self,
        ignore_fuzzy: bool = True,
        report_warning: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.ignore_fuzzy = ignore_fuzzy
        self.report_warning = report_warning
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._reset(Catalog(), "<string>")

    def parse_file(
        self,
        path: Union[str, PathLike[str]],
        catalog: Optional[Catalog] = None,
        encoding: Optional[str] = None,
    ) -> Catalog:
        """ファイルを読み込んで解析します。

        Args:
            path: PO/POTファイルのパス
            catalog: エントリの追加先。指定しない場合は新しい Catalog を作成
            encoding: ファイルのエンコーディング。指定しない場合はヘッダーの charset、
                それもなければ UTF-8

        Raises:
            EncodingError: 指定されたエンコーディングでデコードできない場合
            ParseError: 構文エラーの場合
        """
        path = os.fspath(path)
        with open(path, "rb") as f:
            data = f.read()

        encoding = encoding or detect_charset(data) or DEFAULT_ENCODING
        try:
            text = data.decode(encoding)
        except LookupError as e:
            raise EncodingError(path, encoding, "unknown encoding") from e
        except UnicodeDecodeError as e:
            raise EncodingError(path, encoding, str(e)) from e

        logger.debug(f"{path} を {encoding} として読み込みました")
        return self.parse(text, catalog, path)

    def parse(
        self, text: str, catalog: Optional[Catalog] = None, path: str = "<string>"
    ) -> Catalog:
        """テキストを解析して Catalog に格納します。"""
        self._reset(catalog if catalog is not None else Catalog(), path)
        if text.startswith(BOM):
            text = text[1:]

        for lineno, raw_line in enumerate(text.split("\n"), 1):
            self._lineno = lineno
            self._on_line(raw_line.rstrip("\r").strip())

        self._on_eof()
        return self._catalog

    # ======= Private methods =======
    def _reset(self, catalog: Catalog, path: str) -> None:
        self._catalog = catalog
        self._path = path
        self._lineno = 0
        self._state = ParserState.IDLE
        self._entry: Optional[Entry] = None
        self._field: Optional[Tuple[str, int]] = None

    def _error(self, message: str, lineno: Optional[int] = None) -> ParseError:
        return ParseError(self._path, lineno or self._lineno, message)

    def _on_line(self, line: str) -> None:
        if not line:
            if self._state is ParserState.IN_MSGSTR:
                self._commit()
            return

        if line.startswith("#~"):
            line = line[2:].strip()
            if not line:
                return
            if line.startswith("|"):
                self._on_comment("#" + line, obsolete=True)
            else:
                self._on_token_line(line, obsolete=True)
            return

        if line.startswith("#"):
            self._on_comment(line)
            return

        self._on_token_line(line)

    def _on_eof(self) -> None:
        if self._state is ParserState.EXPECT_MSGID:
            raise self._error("msgctxt without msgid")
        if self._state is not ParserState.IDLE:
            self._commit()
        # msgid を伴わないコメントは捨てる
        self._entry = None

    def _pending(self) -> Entry:
        if self._entry is None:
            self._entry = Entry(lineno=self._lineno)
        return self._entry

    def _start_record(self) -> None:
        """新しいレコードの開始前に、完成している（または msgstr のない）エントリを確定します。"""
        if self._state in (
            ParserState.IN_MSGSTR,
            ParserState.EXPECT_PLURAL_OR_MSGSTR,
            ParserState.EXPECT_MSGSTR,
        ):
            self._commit()

    def _on_comment(self, line: str, obsolete: bool = False) -> None:
        if self._state is ParserState.EXPECT_MSGID:
            raise self._error("comment between msgctxt and msgid")
        self._start_record()

        entry = self._pending()
        if obsolete:
            entry.obsolete = True

        marker = line[1:2]
        if marker == ":":
            entry.references.extend(line[2:].split())
        elif marker == ".":
            entry.extracted_comment = _append_line(entry.extracted_comment, _comment_body(line))
        elif marker == ",":
            for flag in line[2:].split(","):
                flag = flag.strip()
                if flag and flag not in entry.flags:
                    entry.flags.append(flag)
        elif marker == "|":
            entry.previous = _append_line(entry.previous, _comment_body(line))
        else:
            entry.translator_comment = _append_line(
                entry.translator_comment, _comment_body(line, 1)
            )

    def _on_token_line(self, line: str, obsolete: bool = False) -> None:
        if line.startswith('"'):
            self._on_continuation(self._parse_string(line))
            return

        match = KEYWORD_PATTERN.match(line)
        if match is None:
            raise self._error(f"syntax error: {line!r}")
        keyword, index, rest = match.groups()
        if not rest.startswith('"'):
            raise self._error(f"syntax error: {line!r}")
        if index is not None and keyword != "msgstr":
            raise self._error(f"unexpected index for {keyword}")
        value = self._parse_string(rest)

        if keyword == "msgctxt":
            self._on_msgctxt(value)
        elif keyword == "msgid":
            self._on_msgid(value)
        elif keyword == "msgid_plural":
            self._on_msgid_plural(value)
        elif index is None:
            self._on_msgstr(value)
        else:
            self._on_msgstr_plural(index[1:-1], value)

        if obsolete and self._entry is not None:
            self._entry.obsolete = True

    def _on_msgctxt(self, value: str) -> None:
        if self._state is ParserState.EXPECT_MSGID:
            raise self._error("duplicate msgctxt")
        self._start_record()
        self._pending().msgctxt = value
        self._state = ParserState.EXPECT_MSGID
        self._field = ("msgctxt", 0)

    def _on_msgid(self, value: str) -> None:
        self._start_record()
        self._pending().msgid = value
        self._state = ParserState.EXPECT_PLURAL_OR_MSGSTR
        self._field = ("msgid", 0)

    def _on_msgid_plural(self, value: str) -> None:
        if self._state is not ParserState.EXPECT_PLURAL_OR_MSGSTR:
            raise self._error("msgid_plural without msgid")
        self._pending().msgid_plural = value
        self._state = ParserState.EXPECT_MSGSTR
        self._field = ("msgid_plural", 0)

    def _on_msgstr(self, value: str) -> None:
        if self._state is ParserState.EXPECT_MSGSTR:
            raise self._error("msgstr[N] expected for a plural message")
        if self._state is not ParserState.EXPECT_PLURAL_OR_MSGSTR:
            raise self._error("msgstr without msgid")
        self._pending().msgstr = [value]
        self._state = ParserState.IN_MSGSTR
        self._field = ("msgstr", 0)

    def _on_msgstr_plural(self, index_text: str, value: str) -> None:
        if not PLURAL_INDEX_PATTERN.fullmatch(index_text):
            raise self._error(f"invalid plural index: {index_text!r}")
        index = int(index_text)

        entry = self._entry
        if self._state is ParserState.EXPECT_MSGSTR:
            expected = 0
        elif (
            self._state is ParserState.IN_MSGSTR
            and entry is not None
            and entry.is_plural
        ):
            expected = len(entry.msgstr or [])
        elif self._state is ParserState.EXPECT_PLURAL_OR_MSGSTR:
            raise self._error("msgstr[N] without msgid_plural")
        else:
            raise self._error("msgstr[N] without msgid")

        if index != expected:
            raise self._error(f"plural index {index} is out of order (expected {expected})")

        entry = self._pending()
        if entry.msgstr is None:
            entry.msgstr = []
        entry.msgstr.append(value)
        self._state = ParserState.IN_MSGSTR
        self._field = ("msgstr", index)

    def _on_continuation(self, value: str) -> None:
        if self._field is None or self._entry is None:
            raise self._error("string without keyword")

        name, index = self._field
        entry = self._entry
        if name == "msgctxt":
            entry.msgctxt = (entry.msgctxt or "") + value
        elif name == "msgid":
            entry.msgid += value
        elif name == "msgid_plural":
            entry.msgid_plural = (entry.msgid_plural or "") + value
        else:
            msgstr: List[str] = entry.msgstr or [""]
            msgstr[index] += value
            entry.msgstr = msgstr

    def _parse_string(self, token: str) -> str:
        """引用符で囲まれた文字列を解析し、エスケープシーケンスを展開します。"""
        chars: List[str] = []
        i = 1
        length = len(token)
        while i < length:
            char = token[i]
            if char == "\\":
                if i + 1 >= length:
                    break
                following = token[i + 1]
                chars.append(ESCAPE_SEQUENCES.get(following, "\\" + following))
                i += 2
                continue
            if char == '"':
                trailing = token[i + 1 :].strip()
                if trailing:
                    raise self._error(f"unexpected text after string: {trailing!r}")
                return "".join(chars)
            chars.append(char)
            i += 1
        raise self._error("unterminated string")

    def _commit(self) -> None:
        entry = self._entry
        self._entry = None
        self._state = ParserState.IDLE
        self._field = None
        if entry is None:
            return

        self._apply_fuzzy_policy(entry)
        try:
            self._catalog.insert(entry)
        except DuplicateKeyError as e:
            raise self._error(str(e), entry.lineno) from e

    def _apply_fuzzy_policy(self, entry: Entry) -> None:
        if not entry.fuzzy or entry.is_header or entry.obsolete:
            return

        if self.ignore_fuzzy:
            entry.clear_translation()
            if self.report_warning:
                self._warn("fuzzy message was ignored", entry)
        elif self.report_warning:
            self._warn("fuzzy message was used", entry)

    def _warn(self, message: str, entry: Entry) -> None:
        self.logger.warning(f"Warning: {message}.\n  {self._path}: msgid '{entry.msgid}'")


def _append_line(text: Optional[str], line: str) -> str:
    if text is None:
        return line
    return f"{text}\n{line}"


def _comment_body(line: str, marker_length: int = 2) -> str:
    """コメントの記号と直後の区切りの空白1つを取り除きます。"""
    body = line[marker_length:]
    if body.startswith(" "):
        body = body[1:]
    return body


def pofile(path: Union[str, PathLike[str]], **options) -> Catalog:
    """ファイルから Catalog を作成します。"""
    return POParser(**options).parse_file(path)


def pofile_from_text(text: str, **options) -> Catalog:
    """テキストから Catalog を作成します。"""
    return POParser(**options).parse(text)
