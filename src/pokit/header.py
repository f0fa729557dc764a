"""ヘッダーエントリ（メタデータ）の生成

POTファイル先頭の ``msgid ""`` エントリを組み立てます。
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel

from .entry import Entry

# 固定の定型コメント（設定不可）
HEADER_COMMENT_TEMPLATE = (
    "SOME DESCRIPTIVE TITLE.\n"
    "Copyright (C) YEAR {copyright_holder}\n"
    "This file is distributed under the same license as the {package_name} package.\n"
    "FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.\n"
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M%z"


class HeaderOptions(BaseModel):
    """ヘッダー生成のオプション"""

    package_name: str = "PACKAGE"
    package_version: str = "VERSION"
    msgid_bugs_address: str = ""
    copyright_holder: str = "THE PACKAGE'S COPYRIGHT HOLDER"
    to_code: str = "UTF-8"


def format_timestamp(now: datetime) -> str:
    """タイムスタンプを ``YYYY-MM-DD HH:MM+ZZZZ`` 形式に変換します。

    Note:
        タイムゾーン情報のない datetime はローカルタイムゾーンとみなします。
    """
    if now.tzinfo is None:
        now = now.astimezone()
    return now.strftime(TIMESTAMP_FORMAT)


def generate_header(
    options: Optional[HeaderOptions] = None, now: Optional[datetime] = None
) -> Entry:
    """ヘッダーエントリを生成します。

    Args:
        options: ヘッダーのオプション。指定しない場合は既定値を使用
        now: 作成日時。指定しない場合は現在時刻を使用

    Returns:
        fuzzy フラグ付きのヘッダーエントリ

    Note:
        POT-Creation-Date と PO-Revision-Date には同じ時刻が入ります。
    """
    options = options or HeaderOptions()
    timestamp = format_timestamp(now or datetime.now().astimezone())

    fields = [
        ("Project-Id-Version", f"{options.package_name} {options.package_version}"),
        ("Report-Msgid-Bugs-To", options.msgid_bugs_address),
        ("POT-Creation-Date", timestamp),
        ("PO-Revision-Date", timestamp),
        ("Last-Translator", "FULL NAME <EMAIL@ADDRESS>"),
        ("Language-Team", "LANGUAGE <LL@li.org>"),
        ("Language", ""),
        ("MIME-Version", "1.0"),
        ("Content-Type", f"text/plain; charset={options.to_code}"),
        ("Content-Transfer-Encoding", "8bit"),
        ("Plural-Forms", "nplurals=INTEGER; plural=EXPRESSION;"),
    ]
    msgstr = "".join(f"{name}: {value}\n" for name, value in fields)

    comment = HEADER_COMMENT_TEMPLATE.format(
        copyright_holder=options.copyright_holder,
        package_name=options.package_name,
    )
    return Entry(
        msgid="",
        msgstr=[msgstr],
        translator_comment=comment,
        flags=["fuzzy"],
    )


def parse_metadata(msgstr: str) -> Dict[str, str]:
    """ヘッダーの msgstr を ``Key: Value`` の辞書に変換します。"""
    metadata: Dict[str, str] = {}
    for line in msgstr.split("\n"):
        if ":" not in line:
            continue
        name, value = line.split(":", 1)
        metadata[name.strip()] = value.strip()
    return metadata


def update_metadata_field(msgstr: str, name: str, value: str) -> str:
    """ヘッダーの msgstr の1フィールドを書き換えます。

    Note:
        フィールドが存在しない場合は末尾に追加します。
    """
    pattern = re.compile(rf"^{re.escape(name)}:.*$", re.MULTILINE)
    if pattern.search(msgstr):
        return pattern.sub(lambda _: f"{name}: {value}", msgstr, count=1)
    if msgstr and not msgstr.endswith("\n"):
        msgstr += "\n"
    return f"{msgstr}{name}: {value}\n"


def get_charset(metadata: Dict[str, str]) -> Optional[str]:
    """Content-Type から charset を取り出します。"""
    match = re.search(r"charset=([\w.:-]+)", metadata.get("Content-Type", ""))
    if match is None or match.group(1).upper() == "CHARSET":
        return None
    return match.group(1)


def get_nplurals(metadata: Dict[str, str], default: int = 2) -> int:
    """Plural-Forms から nplurals を取り出します。"""
    match = re.search(r"nplurals\s*=\s*(\d+)", metadata.get("Plural-Forms", ""))
    if match is None:
        return default
    return int(match.group(1))
