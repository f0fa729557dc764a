"""PO/POTファイルの作成・更新ツール"""

from pokit_tools.scanners import RawMessage, ScannerRegistry, default_registry
from pokit_tools.xgettext import XGetText, make_reference

__all__ = [
    "RawMessage",
    "ScannerRegistry",
    "XGetText",
    "default_registry",
    "make_reference",
]
