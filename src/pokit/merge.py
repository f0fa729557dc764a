"""既存の翻訳カタログと新しいテンプレートのマージ

Note:
    エントリの対応付けは複合キーの完全一致のみで行います。
    変更された msgid に対する類似度マッチングは行いません。
"""

from __future__ import annotations

import logging
from typing import Optional

from .catalog import Catalog
from .entry import Entry
from .header import get_nplurals, update_metadata_field

logger = logging.getLogger(__name__)


def merge(
    existing: Catalog,
    template: Catalog,
    logger: Optional[logging.Logger] = None,
) -> Catalog:
    """既存のカタログ（翻訳）を新しいテンプレートに合わせて更新します。

    Args:
        existing: 翻訳済みのカタログ（.po）
        template: 抽出したばかりのテンプレート（.pot）
        logger: 結果の出力先

    Returns:
        新しい Catalog。入力のカタログとエントリは変更しません

    Note:
        - テンプレートにあって既存にもあるキー: 翻訳・翻訳者コメント・フラグを引き継ぎ、
          参照箇所と抽出コメントはテンプレートのものを使います
        - テンプレートにだけあるキー: 未翻訳のエントリになります
        - 既存にだけあるキー: 廃止エントリとして末尾に残します
    """
    log = logger if logger is not None else logging.getLogger(__name__)
    merged = Catalog()

    header = _merge_header(existing.header, template.header)
    if header is not None:
        merged.insert(header)

    nplurals = get_nplurals(existing.metadata)
    obsolete_by_key = {entry.key: entry for entry in existing.obsolete_entries()}
    revived = set()

    new_count = 0
    for template_entry in template.each(include_obsolete=False):
        if template_entry.is_header:
            continue
        key = template_entry.key
        old_entry = existing.get(key)
        if old_entry is None and key in obsolete_by_key:
            old_entry = obsolete_by_key[key]
            revived.add(key)

        if old_entry is None:
            merged.insert(_untranslated_entry(template_entry, nplurals))
            new_count += 1
        else:
            merged.insert(_carry_forward(old_entry, template_entry))

    obsolete_count = 0
    # 廃止エントリは Catalog のインデックスに載らない
    obsolete_keys = set()
    for old_entry in existing.each(include_obsolete=False):
        if old_entry.is_header or old_entry.key in merged:
            continue
        merged.insert(_to_obsolete(old_entry))
        obsolete_keys.add(old_entry.key)
        obsolete_count += 1

    for old_entry in existing.obsolete_entries():
        key = old_entry.key
        if key in revived or key in merged or key in obsolete_keys:
            continue
        merged.insert(old_entry.model_copy(deep=True))
        obsolete_keys.add(key)

    log.info(f"merged: {new_count} new, {obsolete_count} obsolete, {len(merged)} total")
    return merged


def _merge_header(existing: Optional[Entry], template: Optional[Entry]) -> Optional[Entry]:
    if existing is None:
        return template.model_copy(deep=True) if template is not None else None

    header = existing.model_copy(deep=True)
    if template is None or not template.msgstr or not header.msgstr:
        return header

    creation_date = _metadata_value(template.msgstr[0], "POT-Creation-Date")
    if creation_date is not None:
        header.msgstr = [
            update_metadata_field(header.msgstr[0], "POT-Creation-Date", creation_date)
        ] + header.msgstr[1:]
    return header


def _metadata_value(msgstr: str, name: str) -> Optional[str]:
    for line in msgstr.split("\n"):
        if line.startswith(f"{name}:"):
            return line[len(name) + 1 :].strip()
    return None


def _carry_forward(old_entry: Entry, template_entry: Entry) -> Entry:
    flags = list(old_entry.flags)
    for flag in template_entry.flags:
        if flag not in flags:
            flags.append(flag)

    return Entry(
        msgctxt=template_entry.msgctxt,
        msgid=template_entry.msgid,
        msgid_plural=template_entry.msgid_plural,
        msgstr=list(old_entry.msgstr) if old_entry.msgstr is not None else None,
        translator_comment=old_entry.translator_comment,
        extracted_comment=template_entry.extracted_comment,
        references=list(template_entry.references),
        flags=flags,
    )


def _untranslated_entry(template_entry: Entry, nplurals: int) -> Entry:
    entry = template_entry.model_copy(deep=True)
    entry.msgstr = [""] * nplurals if entry.is_plural else [""]
    entry.previous = None
    entry.lineno = None
    return entry


def _to_obsolete(old_entry: Entry) -> Entry:
    entry = old_entry.model_copy(deep=True)
    entry.obsolete = True
    entry.references = []
    entry.extracted_comment = None
    return entry
