"""スキャナーの登録先

ScannerRegistry は抽出パイプラインに明示的に渡す登録先オブジェクトです。
プロセス全体の既定の登録先は default_registry() で取得します。
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, List, Optional

from .base import PathType, Scanner
from .erb import ErbScanner
from .python import PythonScanner
from .ruby import RubyScanner

logger = logging.getLogger(__name__)


def builtin_scanners() -> List[Scanner]:
    return [PythonScanner(), RubyScanner(), ErbScanner()]


class ScannerRegistry:
    """スキャナーの順序付きリスト

    Note:
        後から追加したスキャナーが優先されます。
    """

    def __init__(self, scanners: Optional[Iterable[Scanner]] = None) -> None:
        self._scanners: List[Scanner] = list(scanners or [])

    @classmethod
    def with_builtin_scanners(cls) -> ScannerRegistry:
        return cls(builtin_scanners())

    def __iter__(self) -> Iterator[Scanner]:
        return iter(self._scanners)

    def __len__(self) -> int:
        return len(self._scanners)

    def add(self, scanner: Scanner) -> None:
        """スキャナーを最優先で追加します。"""
        self._scanners.insert(0, scanner)
        logger.debug(f"スキャナーを追加しました: {scanner!r}")

    def replace(self, scanners: Iterable[Scanner]) -> None:
        self._scanners = list(scanners)

    def find(self, path: PathType) -> Optional[Scanner]:
        """ファイルを扱う最初のスキャナーを返します。"""
        path = os.fspath(path)
        for scanner in self._scanners:
            if scanner.target(path):
                return scanner
        return None


# シングルトンインスタンス
_default_registry: Optional[ScannerRegistry] = None


def default_registry() -> ScannerRegistry:
    """プロセス全体の既定の登録先を取得する

    Returns:
        ScannerRegistry: 組み込みスキャナーを登録済みのインスタンス
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = ScannerRegistry.with_builtin_scanners()

    return _default_registry
