"""既存の .po ファイルと新しい .pot ファイルのマージ"""

from __future__ import annotations

import logging
import os
from os import PathLike
from typing import Optional, Union

from pokit.catalog import Catalog
from pokit.header import get_charset
from pokit.merge import merge
from pokit.parser import POParser
from pokit.writer import POWriter

logger = logging.getLogger(__name__)

PathType = Union[str, PathLike[str]]


def merge_files(def_po: PathType, ref_pot: PathType) -> Catalog:
    """2つのファイルを読み込んでマージした Catalog を返します。

    Note:
        既存の翻訳は fuzzy であっても保持するため、fuzzy エントリを無視せずに読み込みます。
    """
    parser = POParser(ignore_fuzzy=False, report_warning=False)
    existing = parser.parse_file(def_po)
    template = parser.parse_file(ref_pot)
    return merge(existing, template)


def run(
    def_po: PathType,
    ref_pot: PathType,
    output: Optional[PathType] = None,
    width: int = 0,
) -> Catalog:
    """マージ結果を output（省略時は def_po）に保存します。"""
    merged = merge_files(def_po, ref_pot)
    output = output if output is not None else def_po
    POWriter(width=width).dump(merged, output, encoding=_output_encoding(merged))
    logger.info(f"{os.fspath(def_po)} と {os.fspath(ref_pot)} をマージしました")
    return merged


def _output_encoding(catalog: Catalog) -> str:
    return get_charset(catalog.metadata) or "utf-8"
