"""カタログエントリのモデル

1つの翻訳単位（msgid/msgctxt/msgid_plural/msgstr とコメント類）と、
カタログ内でエントリを一意に識別する複合キーを定義します。
"""

from __future__ import annotations

import functools
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 互換用のキー文字列で使われる区切り文字
CONTEXT_SEPARATOR = "\x04"
PLURAL_SEPARATOR = "\x00"

FUZZY_FLAG = "fuzzy"


@functools.total_ordering
class EntryKey(BaseModel):
    """エントリを一意に識別するためのキー

    msgctxt と msgid_plural はどちらも省略可能で、
    「空文字」と「存在しない」は別のキーとして扱います。
    """

    model_config = ConfigDict(frozen=True)  # イミュータブルにする（NamedTupleと同様）

    msgctxt: Optional[str] = None
    msgid: str
    msgid_plural: Optional[str] = None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EntryKey):
            return NotImplemented
        return self._sort_tuple() < other._sort_tuple()

    def _sort_tuple(self) -> Tuple[bool, str, str, bool, str]:
        return (
            self.msgctxt is not None,
            self.msgctxt or "",
            self.msgid,
            self.msgid_plural is not None,
            self.msgid_plural or "",
        )

    @property
    def legacy(self) -> str:
        """区切り文字で連結した互換形式のキー文字列を返します。

        Returns:
            ``msgctxt + U+0004``（コンテキストがある場合）、``msgid``、
            ``U+0000 + msgid_plural``（複数形がある場合）を連結した文字列
        """
        key = self.msgid
        if self.msgctxt is not None:
            key = self.msgctxt + CONTEXT_SEPARATOR + key
        if self.msgid_plural is not None:
            key = key + PLURAL_SEPARATOR + self.msgid_plural
        return key

    @classmethod
    def from_legacy(cls, text: str) -> EntryKey:
        """互換形式のキー文字列から EntryKey を生成します。"""
        msgctxt: Optional[str] = None
        msgid_plural: Optional[str] = None
        if CONTEXT_SEPARATOR in text:
            msgctxt, text = text.split(CONTEXT_SEPARATOR, 1)
        if PLURAL_SEPARATOR in text:
            text, msgid_plural = text.split(PLURAL_SEPARATOR, 1)
        return cls(msgctxt=msgctxt, msgid=text, msgid_plural=msgid_plural)

    def __str__(self) -> str:
        parts = []
        if self.msgctxt is not None:
            parts.append(f"msgctxt {self.msgctxt!r}")
        parts.append(f"msgid {self.msgid!r}")
        if self.msgid_plural is not None:
            parts.append(f"msgid_plural {self.msgid_plural!r}")
        return ", ".join(parts)


class Entry(BaseModel):
    """POエントリのPydanticモデル

    Note:
        - msgstr が None の場合は msgstr 行そのものが存在しないことを表します
        - 単数形のエントリは msgstr に1要素、複数形のエントリは msgstr[N] の順に要素を持ちます
        - flags は順序を保持した重複のない集合として扱います
    """

    msgid: str = ""
    msgid_plural: Optional[str] = None
    msgctxt: Optional[str] = None
    msgstr: Optional[List[str]] = None
    translator_comment: Optional[str] = None
    extracted_comment: Optional[str] = None
    references: List[str] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)
    previous: Optional[str] = None
    obsolete: bool = False
    lineno: Optional[int] = None  # 読み込み元の行番号（情報用）

    @field_validator("flags", mode="after")
    @classmethod
    def _unique_flags(cls, value: List[str]) -> List[str]:
        flags: List[str] = []
        for flag in value:
            flag = flag.strip()
            if flag and flag not in flags:
                flags.append(flag)
        return flags

    @property
    def key(self) -> EntryKey:
        """複合キー"""
        return EntryKey(
            msgctxt=self.msgctxt, msgid=self.msgid, msgid_plural=self.msgid_plural
        )

    @property
    def is_plural(self) -> bool:
        return self.msgid_plural is not None

    @property
    def is_header(self) -> bool:
        """ヘッダーエントリかどうか"""
        return (
            self.msgid == ""
            and self.msgctxt is None
            and self.msgid_plural is None
            and not self.obsolete
        )

    @property
    def fuzzy(self) -> bool:
        """ファジーかどうか"""
        return FUZZY_FLAG in self.flags

    @fuzzy.setter
    def fuzzy(self, value: bool) -> None:
        """ファジーフラグを設定"""
        if value and FUZZY_FLAG not in self.flags:
            self.flags.append(FUZZY_FLAG)
        elif not value and FUZZY_FLAG in self.flags:
            self.flags.remove(FUZZY_FLAG)

    @property
    def translation(self) -> Optional[str]:
        """翻訳値を返します。

        Returns:
            単数形は msgstr そのもの、複数形は各要素を U+0000 で連結した文字列。
            msgstr 行がない、または全要素が空の場合は None
        """
        if not self.msgstr:
            return None
        if self.is_plural:
            if not any(self.msgstr):
                return None
            return PLURAL_SEPARATOR.join(self.msgstr)
        return self.msgstr[0] or None

    @property
    def is_translated(self) -> bool:
        """翻訳済みかどうか"""
        return self.translation is not None and not self.fuzzy

    def clear_translation(self) -> None:
        """翻訳を空にします（msgstr の要素数は保持）"""
        if self.msgstr is not None:
            self.msgstr = [""] * len(self.msgstr)

    def add_reference(self, reference: str) -> bool:
        if reference in self.references:
            return False
        self.references.append(reference)
        return True

    def add_extracted_comment(self, comment: Optional[str]) -> bool:
        """抽出コメントを追記します。既に含まれている場合は何もしません。"""
        if not comment:
            return False
        if self.extracted_comment is None:
            self.extracted_comment = comment
            return True
        if comment in self.extracted_comment.split("\n"):
            return False
        self.extracted_comment = f"{self.extracted_comment}\n{comment}"
        return True

    def same_content(self, other: Entry) -> bool:
        """行番号以外の内容が完全に一致するかどうか"""
        return self.model_dump(exclude={"lineno"}) == other.model_dump(
            exclude={"lineno"}
        )
