"""MOファイル作成のテスト"""

import gettext

import polib
import pytest

from pokit.mo import build_mofile, compile_catalog
from pokit.parser import POParser

PO_TEXT = """\
msgid ""
msgstr ""
"Project-Id-Version: test 1.0\\n"
"Content-Type: text/plain; charset=UTF-8\\n"
"Plural-Forms: nplurals=2; plural=(n > 1);\\n"

msgid "Hello"
msgstr "Bonjour"

msgctxt "pronoun"
msgid "he"
msgstr "il"

msgid "apple"
msgid_plural "apples"
msgstr[0] "pomme"
msgstr[1] "pommes"

msgid "Untranslated"
msgstr ""

#, fuzzy
msgid "Fuzzy"
msgstr "Flou"

#~ msgid "Gone"
#~ msgstr "Parti"
"""


@pytest.fixture
def catalog():
    return POParser(ignore_fuzzy=False, report_warning=False).parse(PO_TEXT)


def test_build_mofile(catalog):
    mofile = build_mofile(catalog)

    assert sorted(entry.msgid for entry in mofile) == ["Hello", "apple", "he"]
    assert mofile.metadata["Project-Id-Version"] == "test 1.0"


def test_build_mofile_with_fuzzy(catalog):
    mofile = build_mofile(catalog, use_fuzzy=True)
    assert "Fuzzy" in [entry.msgid for entry in mofile]


def test_compile_and_read_back(catalog, tmp_path):
    path = tmp_path / "test.mo"

    compile_catalog(catalog, path)

    mofile = polib.mofile(str(path))
    assert mofile.find("Hello").msgstr == "Bonjour"
    assert mofile.find("he", msgctxt="pronoun").msgstr == "il"
    plural = mofile.find("apple")
    assert plural.msgid_plural == "apples"
    assert plural.msgstr_plural[0] == "pomme"
    assert plural.msgstr_plural[1] == "pommes"
    assert mofile.find("Untranslated") is None
    assert mofile.find("Fuzzy") is None
    assert mofile.find("Gone") is None
    assert mofile.metadata["Plural-Forms"] == "nplurals=2; plural=(n > 1);"


def test_compile_non_utf8_catalog(create_po_file, tmp_path):
    """ヘッダーの charset で文字列をエンコードする"""
    content = (
        'msgid ""\n'
        'msgstr ""\n'
        '"Content-Type: text/plain; charset=EUC-JP\\n"\n'
        "\n"
        'msgid "Hello"\n'
        'msgstr "こんにちは"\n'
    )
    po_path = create_po_file(content, name="ja.po", encoding="euc-jp")
    catalog = POParser(report_warning=False).parse_file(po_path)
    mo_path = tmp_path / "ja.mo"

    compile_catalog(catalog, mo_path)

    with open(mo_path, "rb") as f:
        translations = gettext.GNUTranslations(f)
    assert translations.gettext("Hello") == "こんにちは"
    assert translations.info()["content-type"] == "text/plain; charset=EUC-JP"
