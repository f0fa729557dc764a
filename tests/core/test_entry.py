import unittest

from pokit.entry import Entry, EntryKey


class TestEntryKey(unittest.TestCase):
    def test_legacy_key(self):
        # コンテキストは U+0004、複数形は U+0000 で連結される
        self.assertEqual("hello", EntryKey(msgid="hello").legacy)
        self.assertEqual("pronoun\x04he", EntryKey(msgctxt="pronoun", msgid="he").legacy)
        self.assertEqual("he\x00they", EntryKey(msgid="he", msgid_plural="they").legacy)
        self.assertEqual(
            "pronoun\x04he\x00them",
            EntryKey(msgctxt="pronoun", msgid="he", msgid_plural="them").legacy,
        )

    def test_from_legacy(self):
        key = EntryKey.from_legacy("pronoun\x04he\x00them")
        self.assertEqual(EntryKey(msgctxt="pronoun", msgid="he", msgid_plural="them"), key)
        self.assertEqual(EntryKey(msgid="hello"), EntryKey.from_legacy("hello"))

    def test_empty_context_differs_from_no_context(self):
        self.assertNotEqual(EntryKey(msgctxt="", msgid="a"), EntryKey(msgid="a"))
        self.assertNotEqual(
            EntryKey(msgid="a", msgid_plural=""), EntryKey(msgid="a")
        )

    def test_hashable(self):
        keys = {EntryKey(msgid="a"), EntryKey(msgid="a"), EntryKey(msgctxt="c", msgid="a")}
        self.assertEqual(2, len(keys))

    def test_ordering(self):
        keys = [
            EntryKey(msgctxt="menu", msgid="Open"),
            EntryKey(msgid="b"),
            EntryKey(msgid="a", msgid_plural="as"),
            EntryKey(msgid="a"),
        ]
        self.assertEqual(
            [
                EntryKey(msgid="a"),
                EntryKey(msgid="a", msgid_plural="as"),
                EntryKey(msgid="b"),
                EntryKey(msgctxt="menu", msgid="Open"),
            ],
            sorted(keys),
        )
        self.assertTrue(EntryKey(msgid="a") <= EntryKey(msgid="a"))

    def test_str(self):
        self.assertEqual("msgctxt 'c', msgid 'a'", str(EntryKey(msgctxt="c", msgid="a")))


class TestEntry(unittest.TestCase):
    def test_defaults(self):
        entry = Entry(msgid="hello")
        self.assertIsNone(entry.msgstr)
        self.assertEqual([], entry.references)
        self.assertEqual([], entry.flags)
        self.assertFalse(entry.obsolete)
        self.assertFalse(entry.is_plural)

    def test_flags_are_unique(self):
        entry = Entry(msgid="a", flags=["fuzzy", " c-format ", "fuzzy", ""])
        self.assertEqual(["fuzzy", "c-format"], entry.flags)

    def test_fuzzy_property(self):
        entry = Entry(msgid="a", msgstr=["b"])
        self.assertFalse(entry.fuzzy)

        entry.fuzzy = True
        self.assertEqual(["fuzzy"], entry.flags)
        entry.fuzzy = True
        self.assertEqual(["fuzzy"], entry.flags)

        entry.fuzzy = False
        self.assertEqual([], entry.flags)

    def test_translation(self):
        self.assertIsNone(Entry(msgid="a").translation)
        self.assertIsNone(Entry(msgid="a", msgstr=[""]).translation)
        self.assertEqual("b", Entry(msgid="a", msgstr=["b"]).translation)

    def test_plural_translation(self):
        entry = Entry(msgid="he", msgid_plural="they", msgstr=["", ""])
        self.assertIsNone(entry.translation)

        entry.msgstr = ["il", "ils"]
        self.assertEqual("il\x00ils", entry.translation)

        # 一部だけ翻訳されている場合も翻訳値として扱う
        entry.msgstr = ["il", ""]
        self.assertEqual("il\x00", entry.translation)

    def test_is_translated(self):
        entry = Entry(msgid="a", msgstr=["b"])
        self.assertTrue(entry.is_translated)
        entry.fuzzy = True
        self.assertFalse(entry.is_translated)

    def test_is_header(self):
        self.assertTrue(Entry(msgid="", msgstr=["Language: ja\n"]).is_header)
        self.assertFalse(Entry(msgctxt="c", msgid="").is_header)
        self.assertFalse(Entry(msgid="", obsolete=True).is_header)

    def test_clear_translation(self):
        entry = Entry(msgid="he", msgid_plural="they", msgstr=["il", "ils"])
        entry.clear_translation()
        self.assertEqual(["", ""], entry.msgstr)

        missing = Entry(msgid="a")
        missing.clear_translation()
        self.assertIsNone(missing.msgstr)

    def test_add_reference(self):
        entry = Entry(msgid="a", references=["a.rb:1"])
        self.assertTrue(entry.add_reference("b.rb:2"))
        self.assertFalse(entry.add_reference("a.rb:1"))
        self.assertEqual(["a.rb:1", "b.rb:2"], entry.references)

    def test_add_extracted_comment(self):
        entry = Entry(msgid="a")
        self.assertFalse(entry.add_extracted_comment(None))
        self.assertTrue(entry.add_extracted_comment("first"))
        self.assertTrue(entry.add_extracted_comment("second"))
        self.assertFalse(entry.add_extracted_comment("first"))
        self.assertEqual("first\nsecond", entry.extracted_comment)

    def test_same_content_ignores_lineno(self):
        self.assertTrue(
            Entry(msgid="a", msgstr=["b"], lineno=1).same_content(
                Entry(msgid="a", msgstr=["b"], lineno=10)
            )
        )
        self.assertFalse(
            Entry(msgid="a", msgstr=["b"]).same_content(Entry(msgid="a", msgstr=["c"]))
        )
