"""コンパイル済みカタログ（.mo）の作成

polib の MOFile を使用してバイナリ形式のカタログを書き出します。
"""

from __future__ import annotations

import logging
import os
from os import PathLike
from typing import Union

import polib

from .catalog import Catalog
from .header import get_charset

logger = logging.getLogger(__name__)


def build_mofile(catalog: Catalog, use_fuzzy: bool = False) -> polib.MOFile:
    """Catalog から polib.MOFile を作成します。

    Args:
        catalog: 変換元のカタログ
        use_fuzzy: fuzzy フラグ付きのエントリも含めるかどうか

    Returns:
        polib.MOFile

    Note:
        - 未翻訳のエントリと廃止エントリは含めません
        - ヘッダーは MOFile のメタデータとして格納します
        - 文字列はヘッダーの charset（なければ UTF-8）でエンコードします
    """
    mofile = polib.MOFile(encoding=get_charset(catalog.metadata) or "utf-8")
    mofile.metadata = dict(catalog.metadata)

    skipped = 0
    for entry in catalog.each(include_obsolete=False):
        if entry.is_header:
            continue
        if entry.translation is None or (entry.fuzzy and not use_fuzzy):
            skipped += 1
            continue

        kwargs = {"msgid": entry.msgid}
        if entry.msgctxt is not None:
            kwargs["msgctxt"] = entry.msgctxt
        if entry.is_plural:
            kwargs["msgid_plural"] = entry.msgid_plural
            kwargs["msgstr_plural"] = dict(enumerate(entry.msgstr or []))
        else:
            kwargs["msgstr"] = (entry.msgstr or [""])[0]
        mofile.append(polib.MOEntry(**kwargs))

    logger.debug(f"{len(mofile)} 件を変換しました（{skipped} 件をスキップ）")
    return mofile


def compile_catalog(
    catalog: Catalog, path: Union[str, PathLike[str]], use_fuzzy: bool = False
) -> polib.MOFile:
    """Catalog を .mo ファイルとして保存します。"""
    mofile = build_mofile(catalog, use_fuzzy=use_fuzzy)
    mofile.save(os.fspath(path))
    logger.info(f".moファイルを保存しました: {path}")
    return mofile
