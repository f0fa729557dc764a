"""翻訳対象文字列の抽出（POTファイルの作成）

複数のソースファイルをスキャナーで解析し、1つのテンプレートカタログにまとめます。
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from os import PathLike
from typing import Iterable, List, Optional, Sequence, Union

from pokit.catalog import Catalog
from pokit.entry import Entry
from pokit.errors import EncodingError
from pokit.header import HeaderOptions, generate_header
from pokit.writer import POWriter

from .scanners.base import RawMessage, RawRecord, Scanner, SourceScanner, decode_source
from .scanners.registry import ScannerRegistry

logger = logging.getLogger(__name__)

PathType = Union[str, PathLike[str]]


def make_reference(path: PathType, line: int, output: Optional[PathType] = None) -> str:
    """参照箇所の文字列 ``file:line`` を作成します。

    Note:
        output を指定した場合、パスは出力先ディレクトリからの相対パスになります。
    """
    path = os.fspath(path)
    if output is not None:
        output_dir = os.path.dirname(os.path.abspath(os.fspath(output)))
        path = os.path.relpath(os.path.abspath(path), output_dir)
    return f"{path.replace(os.sep, '/')}:{line}"


class XGetText:
    """ソースファイルからテンプレートカタログを作成するクラス

    Args:
        registry: スキャナーの登録先。指定しない場合は組み込みスキャナーだけの登録先を作成
        header_options: ヘッダーのオプション
        from_code: マジックコメントのないファイルのエンコーディング
        width: 出力の1行の最大幅（0 は折り返しなし）

    Note:
        - ファイルは指定された順に、文字列はスキャナーが返した順に処理します
        - 同じキーの文字列は最初に現れた位置に1件だけ置き、参照箇所を追加します
        - どのスキャナーにも一致しないファイルは無視します
    """

    def __init__(
        self,
        registry: Optional[ScannerRegistry] = None,
        header_options: Optional[HeaderOptions] = None,
        from_code: str = "utf-8",
        width: int = 0,
    ) -> None:
        self.registry = registry if registry is not None else ScannerRegistry.with_builtin_scanners()
        self.header_options = header_options or HeaderOptions()
        self.from_code = from_code
        self.width = width
        self._scanners: List[Scanner] = []

    def add_scanner(self, scanner: Scanner) -> None:
        """このインスタンスだけで使うスキャナーを最優先で追加します。

        Note:
            登録先（registry）は変更しません。
        """
        self._scanners.insert(0, scanner)

    def find_scanner(self, path: PathType) -> Optional[Scanner]:
        path = os.fspath(path)
        for scanner in self._scanners:
            if scanner.target(path):
                return scanner
        return self.registry.find(path)

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def parse(self, paths: Iterable[PathType], output: Optional[PathType] = None) -> Catalog:
        """ソースファイルを解析してヘッダーなしのカタログを作成します。

        Raises:
            EncodingError: ファイルをデコードできない場合
            ParseError: スキャナーがソースを解析できない場合
        """
        catalog = Catalog()
        for path in paths:
            scanner = self.find_scanner(path)
            if scanner is None:
                logger.debug(f"対応するスキャナーがありません: {path}")
                continue

            count = 0
            for record in self._scan(scanner, path):
                message = record if isinstance(record, RawMessage) else RawMessage.model_validate(record)
                if not message.msgid:
                    # 空の msgid はヘッダー用に予約されている
                    logger.warning(f"{path}:{message.line}: empty msgid is reserved for the header")
                    continue
                catalog.insert_or_merge_references(self._to_entry(message, path, output))
                count += 1
            logger.info(f"{path}: {count} 件の文字列を抽出しました")
        return catalog

    def generate(self, paths: Iterable[PathType], output: Optional[PathType] = None) -> Catalog:
        """ヘッダー付きのテンプレートカタログを作成します。"""
        extracted = self.parse(paths, output)
        catalog = Catalog()
        catalog.insert(generate_header(self.header_options, self.now()))
        for entry in extracted:
            catalog.insert(entry)
        return catalog

    def dumps(self, paths: Iterable[PathType], output: Optional[PathType] = None) -> str:
        return POWriter(width=self.width).dumps(self.generate(paths, output))

    def run(self, paths: Sequence[PathType], output: Optional[PathType] = None) -> None:
        """テンプレートを作成し、output（省略時は標準出力）に書き出します。

        Note:
            抽出やエンコードに失敗した場合は何も書き出しません。
        """
        text = self.dumps(paths, output)
        encoding = self.header_options.to_code
        try:
            data = text.encode(encoding)
        except LookupError as e:
            raise EncodingError(os.fspath(output or "<stdout>"), encoding, "unknown encoding") from e
        except UnicodeEncodeError as e:
            raise EncodingError(os.fspath(output or "<stdout>"), encoding, str(e)) from e

        if output is None:
            sys.stdout.buffer.write(data)
            sys.stdout.flush()
            return

        output_dir = os.path.dirname(os.fspath(output))
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(output, "wb") as f:
            f.write(data)
        logger.info(f"テンプレートを保存しました: {output}")

    # ======= Private methods =======
    def _scan(self, scanner: Scanner, path: PathType) -> Sequence[RawRecord]:
        if not isinstance(scanner, SourceScanner):
            return scanner.parse(os.fspath(path))

        with open(path, "rb") as f:
            data = f.read()
        encoding = scanner.detect_encoding(data) or self.from_code
        text = decode_source(path, data, encoding)
        return scanner.scan(text, os.fspath(path))

    def _to_entry(self, message: RawMessage, path: PathType, output: Optional[PathType]) -> Entry:
        return Entry(
            msgid=message.msgid,
            msgid_plural=message.msgid_plural,
            msgctxt=message.msgctxt,
            msgstr=["", ""] if message.msgid_plural is not None else [""],
            extracted_comment=message.extracted_comment,
            references=[make_reference(path, message.line, output)],
        )
