""".po ファイルのコンパイル（.mo ファイルの作成）"""

from __future__ import annotations

import logging
from os import PathLike
from typing import Union

import polib

from pokit.mo import compile_catalog
from pokit.parser import POParser

logger = logging.getLogger(__name__)

PathType = Union[str, PathLike[str]]


def run(
    po_path: PathType,
    output: PathType,
    use_fuzzy: bool = False,
    report_warning: bool = True,
) -> polib.MOFile:
    """.po ファイルを読み込んで .mo ファイルを作成します。

    Args:
        po_path: 入力の .po ファイル
        output: 出力する .mo ファイル
        use_fuzzy: fuzzy エントリの翻訳も使用するかどうか
        report_warning: fuzzy エントリについて警告を出力するかどうか
    """
    parser = POParser(ignore_fuzzy=not use_fuzzy, report_warning=report_warning)
    catalog = parser.parse_file(po_path)
    return compile_catalog(catalog, output, use_fuzzy=use_fuzzy)
