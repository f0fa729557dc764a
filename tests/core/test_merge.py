"""merge のテスト"""

import logging

import pytest

from pokit.catalog import Catalog
from pokit.entry import Entry
from pokit.merge import merge
from pokit.parser import POParser
from pokit.writer import POWriter

EXISTING_PO = """\
msgid ""
msgstr ""
"Project-Id-Version: app 1.0\\n"
"POT-Creation-Date: 2012-01-01 00:00+0000\\n"
"Language: fr\\n"
"Plural-Forms: nplurals=3; plural=(n==1 ? 0 : n==2 ? 1 : 2);\\n"

# keep me
#: old.rb:1
msgid "Hello"
msgstr "Bonjour"

#: old.rb:2
msgid "Removed"
msgstr "Supprimé"

#, fuzzy
msgid "Fuzzy one"
msgstr "Flou"

#~ msgid "Back again"
#~ msgstr "De retour"

#~ msgid "Long gone"
#~ msgstr "Parti"
"""

TEMPLATE_POT = """\
#, fuzzy
msgid ""
msgstr ""
"Project-Id-Version: PACKAGE VERSION\\n"
"POT-Creation-Date: 2013-05-06 07:08+0900\\n"
"Language: \\n"

#. greeting
#: new.rb:3
#, ruby-format
msgid "Hello"
msgstr ""

#: new.rb:4
msgid "New"
msgstr ""

#: new.rb:5
msgid "apple"
msgid_plural "apples"
msgstr[0] ""
msgstr[1] ""

#: new.rb:6
msgid "Fuzzy one"
msgstr ""

#: new.rb:7
msgid "Back again"
msgstr ""
"""


@pytest.fixture
def existing():
    return POParser(ignore_fuzzy=False, report_warning=False).parse(EXISTING_PO)


@pytest.fixture
def template():
    return POParser(ignore_fuzzy=False, report_warning=False).parse(TEMPLATE_POT)


@pytest.fixture
def merged(existing, template):
    return merge(existing, template)


def test_order(merged):
    """テンプレートの順序の後ろに廃止エントリが並ぶ"""
    assert [(entry.msgid, entry.obsolete) for entry in merged] == [
        ("", False),
        ("Hello", False),
        ("New", False),
        ("apple", False),
        ("Fuzzy one", False),
        ("Back again", False),
        ("Removed", True),
        ("Long gone", True),
    ]


def test_header(merged):
    """既存のヘッダーを残し、POT-Creation-Date だけ更新する"""
    assert merged.metadata["Project-Id-Version"] == "app 1.0"
    assert merged.metadata["Language"] == "fr"
    assert merged.metadata["POT-Creation-Date"] == "2013-05-06 07:08+0900"
    assert not merged.header.fuzzy


def test_carried_forward_translation(merged):
    entry = merged.get("Hello")

    assert entry.msgstr == ["Bonjour"]
    assert entry.translator_comment == "keep me"
    assert entry.references == ["new.rb:3"]
    assert entry.extracted_comment == "greeting"
    assert entry.flags == ["ruby-format"]


def test_new_entries_are_untranslated(merged):
    assert merged.get("New").msgstr == [""]
    # 複数形の要素数は既存カタログの nplurals に合わせる
    assert merged.get("apple\x00apples").msgstr == ["", "", ""]


def test_fuzzy_is_kept(merged):
    entry = merged.get("Fuzzy one")
    assert entry.fuzzy
    assert entry.msgstr == ["Flou"]


def test_obsolete_entry_is_revived(merged):
    entry = merged.get("Back again")
    assert entry is not None
    assert not entry.obsolete
    assert entry.translation == "De retour"
    assert entry.references == ["new.rb:7"]


def test_removed_entry_becomes_obsolete(merged):
    assert merged.get("Removed") is None
    removed = [entry for entry in merged.obsolete_entries() if entry.msgid == "Removed"][0]
    assert removed.msgstr == ["Supprimé"]
    assert removed.references == []


def test_inputs_are_not_modified(existing, template):
    merge(existing, template)

    assert existing.get("Hello").references == ["old.rb:1"]
    assert existing.get("Removed").obsolete is False
    assert existing.metadata["POT-Creation-Date"] == "2012-01-01 00:00+0000"
    assert template.get("Hello").msgstr == [""]


def test_without_existing_header(template):
    merged = merge(Catalog([Entry(msgid="Hello", msgstr=["Salut"])]), template)

    assert merged.metadata["Project-Id-Version"] == "PACKAGE VERSION"
    assert merged.get_translation("Hello") == "Salut"
    # nplurals がない場合は2
    assert merged.get("apple\x00apples").msgstr == ["", ""]


def test_context_is_part_of_the_key():
    existing = Catalog([Entry(msgctxt="menu", msgid="Open", msgstr=["Ouvrir"])])
    template = Catalog([Entry(msgid="Open", msgstr=[""])])

    merged = merge(existing, template)

    assert merged.get_translation("Open") is None
    assert [entry.msgctxt for entry in merged.obsolete_entries()] == ["menu"]


def test_summary_is_logged(existing, template, caplog):
    with caplog.at_level(logging.INFO, logger="pokit.merge"):
        merge(existing, template)

    assert caplog.messages == ["merged: 2 new, 1 obsolete, 8 total"]


def test_obsolete_entry_is_not_duplicated():
    """有効なエントリと同じキーの廃止エントリは1件だけ残す"""
    existing = POParser(report_warning=False).parse(
        'msgid "x"\nmsgstr "new"\n\n#~ msgid "x"\n#~ msgstr "old"\n'
    )
    template = Catalog([Entry(msgid="y", msgstr=[""])])

    merged = merge(existing, template)

    obsolete = merged.obsolete_entries()
    assert [(entry.msgid, entry.msgstr) for entry in obsolete] == [("x", ["new"])]
    assert POWriter().dumps(merged).count('#~ msgid "x"') == 1
