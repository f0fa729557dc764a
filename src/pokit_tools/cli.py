"""コマンドラインインターフェース"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from pokit.errors import PokitError
from pokit.parser import POParser
from pokit_tools import msgfmt, msgmerge
from pokit_tools.config import Config, get_config
from pokit_tools.scanners.registry import default_registry
from pokit_tools.xgettext import XGetText

logger = logging.getLogger(__name__)

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokit", description="PO/POTファイルツール")
    parser.add_argument("-v", "--verbose", action="store_true", help="詳細なログを出力する")
    parser.add_argument("--config", type=Path, help="設定ファイルのパス")
    subparsers = parser.add_subparsers(dest="command", required=True)

    xgettext = subparsers.add_parser("xgettext", help="ソースファイルからPOTファイルを作成する")
    xgettext.add_argument("inputs", nargs="+", help="ソースファイル")
    xgettext.add_argument("-o", "--output", help="出力するPOTファイル（省略時は標準出力）")
    xgettext.add_argument("--package-name")
    xgettext.add_argument("--package-version")
    xgettext.add_argument("--msgid-bugs-address")
    xgettext.add_argument("--copyright-holder")
    xgettext.add_argument("--output-encoding", dest="to_code")
    xgettext.add_argument("--from-code", help="マジックコメントのないファイルのエンコーディング")
    xgettext.add_argument("--width", type=int)

    merge = subparsers.add_parser("msgmerge", help="既存のPOファイルをPOTファイルに合わせて更新する")
    merge.add_argument("def_po")
    merge.add_argument("ref_pot")
    merge.add_argument("-o", "--output", help="出力するPOファイル（省略時は def_po を上書き）")
    merge.add_argument("--width", type=int)

    fmt = subparsers.add_parser("msgfmt", help="POファイルから.moファイルを作成する")
    fmt.add_argument("po_file")
    fmt.add_argument("-o", "--output", required=True)
    fmt.add_argument(
        "--use-fuzzy",
        action="store_true",
        default=None,
        help="fuzzy エントリも使用する（省略時は設定の parser.ignore_fuzzy に従う）",
    )

    stats = subparsers.add_parser("stats", help="POファイルの統計情報を表示する")
    stats.add_argument("po_file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """コマンドラインインターフェースのエントリポイント"""
    args = build_parser().parse_args(argv)
    config = Config(args.config) if args.config else get_config()

    level = logging.DEBUG if args.verbose else config.get("logging.level", "WARNING")
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        if args.command == "xgettext":
            return _run_xgettext(args, config)
        if args.command == "msgmerge":
            width = args.width if args.width is not None else config.get("writer.width", 0)
            msgmerge.run(args.def_po, args.ref_pot, args.output, width=width)
            return 0
        if args.command == "msgfmt":
            use_fuzzy = args.use_fuzzy
            if use_fuzzy is None:
                use_fuzzy = not config.get("parser.ignore_fuzzy", True)
            msgfmt.run(
                args.po_file,
                args.output,
                use_fuzzy=use_fuzzy,
                report_warning=config.get("parser.report_warning", True),
            )
            return 0
        return _run_stats(args)
    except PokitError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"エラー: {e}")
        return 1


def _run_xgettext(args: argparse.Namespace, config: Config) -> int:
    options = config.header_options(
        package_name=args.package_name,
        package_version=args.package_version,
        msgid_bugs_address=args.msgid_bugs_address,
        copyright_holder=args.copyright_holder,
        to_code=args.to_code,
    )
    xgettext = XGetText(
        registry=default_registry(),
        header_options=options,
        from_code=args.from_code or config.get("xgettext.from_code", "utf-8"),
        width=args.width if args.width is not None else config.get("writer.width", 0),
    )
    xgettext.run(args.inputs, args.output)
    return 0


def _run_stats(args: argparse.Namespace) -> int:
    parser = POParser(ignore_fuzzy=False, report_warning=False)
    catalog = parser.parse_file(args.po_file)
    stats = catalog.stats()

    table = Table(title=f"PO File: {Path(args.po_file).name}")
    table.add_column("項目", style="cyan")
    table.add_column("値", style="green")

    table.add_row("総エントリ数", str(stats.total))
    table.add_row("翻訳済み", str(stats.translated))
    table.add_row("未翻訳", str(stats.untranslated))
    table.add_row("ファジー", str(stats.fuzzy))
    table.add_row("廃止", str(stats.obsolete))
    table.add_row("進捗率", f"{stats.progress:.1f}%")

    console.print(table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
