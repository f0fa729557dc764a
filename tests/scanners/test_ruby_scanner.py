"""Ruby/ERB スキャナーのテスト"""

from pokit_tools.scanners.base import RawMessage
from pokit_tools.scanners.erb import ErbScanner
from pokit_tools.scanners.ruby import RubyScanner, read_string_literal

RUBY_SOURCE = """\
class Greeter
  def hello
    # TRANSLATORS: greeting shown on start
    puts _("Hello")
    puts n_("%d apple", "%d apples", count) % count
    puts p_("menu", "Open")
    puts np_("menu", "%d file", "%d files", count)
    # _("commented out")
    puts _("multi " +
           "part")
    puts _("interpolated #{name}")
    puts _(variable)
    puts obj._("method")
    puts s_('single \\'quoted\\'')
  end
end
"""


def scan(source, path="lib/greeter.rb"):
    return RubyScanner().scan(source, path)


def test_ruby_messages():
    messages = scan(RUBY_SOURCE)

    assert [(m.msgctxt, m.msgid, m.msgid_plural, m.line) for m in messages] == [
        (None, "Hello", None, 4),
        (None, "%d apple", "%d apples", 5),
        ("menu", "Open", None, 6),
        ("menu", "%d file", "%d files", 7),
        (None, "multi part", None, 9),
        (None, "single 'quoted'", None, 14),
    ]


def test_translator_comment():
    messages = scan(RUBY_SOURCE)

    assert messages[0].extracted_comment == "TRANSLATORS: greeting shown on start"
    assert messages[1].extracted_comment is None


def test_escape_sequences_in_double_quotes():
    messages = scan('_("line\\nnext\\t\\"q\\"")\n')
    assert messages == [RawMessage(msgid='line\nnext\t"q"', line=1)]


def test_read_string_literal():
    assert read_string_literal("'a\\nb' rest", 0) == ("a\\nb", 6)
    assert read_string_literal('"a"', 0) == ("a", 3)
    assert read_string_literal('"unterminated', 0) is None
    assert read_string_literal("name", 0) is None


def test_ruby_target():
    scanner = RubyScanner()
    assert scanner.target("lib/a.rb")
    assert scanner.target("LIB/A.RB")
    assert not scanner.target("lib/a.rhtml")


def test_magic_comment():
    scanner = RubyScanner()
    assert scanner.detect_encoding(b"# -*- coding: euc-jp -*-\n_('x')\n") == "euc-jp"
    assert scanner.detect_encoding(b"#!/usr/bin/ruby\n# encoding: cp932\n") == "cp932"
    assert scanner.detect_encoding(b"\n\n# coding: cp932\n") is None
    assert scanner.detect_encoding(b"_('x')\n") is None


def test_parse_file(tmp_path):
    path = tmp_path / "a.rb"
    path.write_bytes('# -*- coding: euc-jp -*-\n_("こんにちは")\n'.encode("euc-jp"))

    messages = RubyScanner().parse(path)

    assert messages == [RawMessage(msgid="こんにちは", line=2)]


ERB_SOURCE = """\
<%# -*- coding: cp932 -*-%>
<h1><%= _("Title") %></h1>
<p>_("not code")</p>
<% if n_("%d item", "%d items", n) %>
<%# _("comment tag") %>
<%- p_("button", "Save") -%>
"""


def test_erb_messages():
    messages = ErbScanner().scan(ERB_SOURCE, "index.html.erb")

    assert [(m.msgctxt, m.msgid, m.msgid_plural, m.line) for m in messages] == [
        (None, "Title", None, 2),
        (None, "%d item", "%d items", 4),
        ("button", "Save", None, 6),
    ]


def test_erb_target_and_encoding():
    scanner = ErbScanner()
    assert scanner.target("templates/index.rhtml")
    assert scanner.target("templates/index.html.erb")
    assert not scanner.target("templates/index.html")
    assert scanner.detect_encoding(b"<%#-*- coding: sjis -*-%>\n<html>\n") == "sjis"
