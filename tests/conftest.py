"""pytestの設定ファイル

テストで共通して使うフィクスチャを定義します。
"""

from datetime import datetime, timedelta, timezone

import pytest

from pokit.parser import POParser

# ヘッダーの日時を固定するための時刻
FIXED_NOW = datetime(2012, 8, 19, 18, 10, tzinfo=timezone(timedelta(hours=9)))


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def create_po_file(tmp_path):
    """一時ディレクトリにPOファイルを作成するフィクスチャ"""

    def _create(content: str, name: str = "hello.po", encoding: str = "utf-8"):
        path = tmp_path / name
        path.write_bytes(content.encode(encoding))
        return path

    return _create


@pytest.fixture
def parse_text():
    """テキストを解析するフィクスチャ（警告は出さない）"""

    def _parse(text: str, ignore_fuzzy: bool = False):
        parser = POParser(ignore_fuzzy=ignore_fuzzy, report_warning=False)
        return parser.parse(text)

    return _parse


@pytest.fixture
def expected_header(now):
    """generate_header が出力するヘッダーのテキストを組み立てるフィクスチャ"""

    def _header(
        package_name="PACKAGE",
        package_version="VERSION",
        msgid_bugs_address="",
        copyright_holder="THE PACKAGE'S COPYRIGHT HOLDER",
        to_code="UTF-8",
    ):
        time = now.strftime("%Y-%m-%d %H:%M%z")
        return (
            "# SOME DESCRIPTIVE TITLE.\n"
            f"# Copyright (C) YEAR {copyright_holder}\n"
            f"# This file is distributed under the same license as the {package_name} package.\n"
            "# FIRST AUTHOR <EMAIL@ADDRESS>, YEAR.\n"
            "#\n"
            "#, fuzzy\n"
            'msgid ""\n'
            'msgstr ""\n'
            f'"Project-Id-Version: {package_name} {package_version}\\n"\n'
            f'"Report-Msgid-Bugs-To: {msgid_bugs_address}\\n"\n'
            f'"POT-Creation-Date: {time}\\n"\n'
            f'"PO-Revision-Date: {time}\\n"\n'
            '"Last-Translator: FULL NAME <EMAIL@ADDRESS>\\n"\n'
            '"Language-Team: LANGUAGE <LL@li.org>\\n"\n'
            '"Language: \\n"\n'
            '"MIME-Version: 1.0\\n"\n'
            f'"Content-Type: text/plain; charset={to_code}\\n"\n'
            '"Content-Transfer-Encoding: 8bit\\n"\n'
            '"Plural-Forms: nplurals=INTEGER; plural=EXPRESSION;\\n"\n'
        )

    return _header
