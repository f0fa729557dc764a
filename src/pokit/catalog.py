"""翻訳カタログ

複合キーで一意なエントリを挿入順に保持するコレクションです。
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, Field

from .entry import Entry, EntryKey
from .errors import DuplicateKeyError
from .header import parse_metadata

KeyLike = Union[EntryKey, str]


class CatalogStats(BaseModel):
    """カタログの統計情報（ヘッダーエントリは含まない）"""

    total: int = Field(0, description="有効なエントリ数")
    translated: int = Field(0, description="翻訳済みエントリ数")
    untranslated: int = Field(0, description="未翻訳エントリ数")
    fuzzy: int = Field(0, description="ファジーエントリ数")
    obsolete: int = Field(0, description="廃止エントリ数")

    @property
    def progress(self) -> float:
        """翻訳の進捗率（%）"""
        if self.total == 0:
            return 0.0
        return self.translated / self.total * 100


class Catalog:
    """エントリの順序付きコレクション

    Note:
        - 反復順序は挿入順（最初に現れた順）です
        - 廃止エントリ（obsolete）は順序には含まれますが、キー検索の対象外です
    """

    def __init__(self, entries: Optional[List[Entry]] = None) -> None:
        self._entries: List[Entry] = []
        self._index: Dict[EntryKey, Entry] = {}
        for entry in entries or []:
            self.insert(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return self.each()

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            key = EntryKey.from_legacy(key)
        return key in self._index

    def __repr__(self) -> str:
        return f"<Catalog entries={len(self._entries)}>"

    def insert(self, entry: Entry) -> Entry:
        """エントリを挿入します。

        Args:
            entry: 挿入するエントリ

        Returns:
            カタログに格納されているエントリ

        Raises:
            DuplicateKeyError: 同じキーを持つ内容の異なるエントリが既に存在する場合

        Note:
            完全に同一のエントリの再挿入は何もしません。
        """
        if entry.obsolete:
            self._entries.append(entry)
            return entry

        key = entry.key
        existing = self._index.get(key)
        if existing is not None:
            if existing.same_content(entry):
                return existing
            raise DuplicateKeyError(key)

        self._entries.append(entry)
        self._index[key] = entry
        return entry

    def insert_or_merge_references(self, entry: Entry) -> Entry:
        """エントリを挿入し、既存のキーであれば参照箇所をマージします。

        Note:
            - 既存エントリの位置は変わりません
            - 新しい参照箇所は既存の参照の後ろに追加されます
            - 新しい抽出コメントは既存の抽出コメントの後ろに追記されます
        """
        if entry.obsolete:
            return self.insert(entry)

        existing = self._index.get(entry.key)
        if existing is None:
            return self.insert(entry)

        for reference in entry.references:
            existing.add_reference(reference)
        existing.add_extracted_comment(entry.extracted_comment)
        for flag in entry.flags:
            if flag not in existing.flags:
                existing.flags.append(flag)
        return existing

    def lookup(
        self,
        msgctxt: Optional[str],
        msgid: str,
        msgid_plural: Optional[str] = None,
    ) -> Optional[Entry]:
        """キーに一致する有効なエントリを検索します。"""
        return self._index.get(
            EntryKey(msgctxt=msgctxt, msgid=msgid, msgid_plural=msgid_plural)
        )

    def get(self, key: KeyLike) -> Optional[Entry]:
        if isinstance(key, str):
            key = EntryKey.from_legacy(key)
        return self._index.get(key)

    def get_translation(self, key: KeyLike) -> Optional[str]:
        """翻訳値を返します。

        Args:
            key: EntryKey または互換形式のキー文字列

        Returns:
            翻訳値。エントリが存在しない場合と未翻訳の場合はどちらも None
        """
        entry = self.get(key)
        if entry is None:
            return None
        return entry.translation

    def each(self, include_obsolete: bool = True) -> Iterator[Entry]:
        """エントリを挿入順に返すイテレータを生成します。"""
        for entry in self._entries:
            if entry.obsolete and not include_obsolete:
                continue
            yield entry

    def active_entries(self) -> List[Entry]:
        return list(self.each(include_obsolete=False))

    def obsolete_entries(self) -> List[Entry]:
        return [entry for entry in self._entries if entry.obsolete]

    @property
    def header(self) -> Optional[Entry]:
        """ヘッダーエントリ（msgid が空のエントリ）"""
        return self._index.get(EntryKey(msgid=""))

    @property
    def metadata(self) -> Dict[str, str]:
        """ヘッダーの ``Key: Value`` フィールド"""
        header = self.header
        if header is None or not header.msgstr:
            return {}
        return parse_metadata(header.msgstr[0])

    def to_messages(self) -> Dict[str, str]:
        """翻訳済みの有効なエントリを互換形式のキーから翻訳値への辞書に変換します。

        Note:
            ヘッダーエントリも含まれます（キーは空文字）。
        """
        messages: Dict[str, str] = {}
        for entry in self.each(include_obsolete=False):
            translation = entry.translation
            if translation is not None:
                messages[entry.key.legacy] = translation
        return messages

    def stats(self) -> CatalogStats:
        stats = CatalogStats()
        for entry in self._entries:
            if entry.obsolete:
                stats.obsolete += 1
                continue
            if entry.is_header:
                continue
            stats.total += 1
            if entry.fuzzy:
                stats.fuzzy += 1
            elif entry.translation is None:
                stats.untranslated += 1
            else:
                stats.translated += 1
        return stats
