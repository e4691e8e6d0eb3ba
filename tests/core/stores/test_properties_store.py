import pytest

from tagconf.core.base.exceptions import ConfigurationError, StoreInitializationError
from tagconf.core.base.types import Entry
from tagconf.core.stores.base import split_tagged_key
from tagconf.core.stores.properties import PropertiesStore, parse_properties


class TestParseProperties:
    def test_separators(self):
        text = "a=1\nb:2\nc 3\nd = 4\ne\t:\t5\n"
        assert parse_properties(text) == [("a", "1"), ("b", "2"), ("c", "3"), ("d", "4"), ("e", "5")]

    def test_comments_and_blank_lines(self):
        text = "# comment\n! also a comment\n\n   \nkey=value\n"
        assert parse_properties(text) == [("key", "value")]

    def test_value_keeps_inner_separators(self):
        assert parse_properties("url=jdbc:mysql://host:3306/db?a=b") == [
            ("url", "jdbc:mysql://host:3306/db?a=b"),
        ]

    def test_line_continuation(self):
        text = "fruits = apple, \\\n    banana, \\\n    pear\nnext=1"
        assert parse_properties(text) == [("fruits", "apple, banana, pear"), ("next", "1")]

    def test_escaped_backslash_does_not_continue(self):
        assert parse_properties("path=c:\\\\\nother=x") == [("path", "c:\\"), ("other", "x")]

    def test_escapes(self):
        assert parse_properties("a=tab\\there\\nline\\u0041") == [("a", "tab\there\nlineA")]

    def test_escaped_separator_in_key(self):
        assert parse_properties("my\\ key\\=x = value") == [("my key=x", "value")]

    def test_key_without_value(self):
        assert parse_properties("empty\nalso=") == [("empty", ""), ("also", "")]

    def test_malformed_unicode_escape(self):
        with pytest.raises(ConfigurationError, match="line 2"):
            parse_properties("ok=1\nbad=\\u00G1")


class TestSplitTaggedKey:
    @pytest.mark.parametrize("key, expected", [
        ("@prod.db.url", ("prod", "db.url")),
        ("@prod.x", ("prod", "x")),
        ("db.url", (None, "db.url")),
        ("@prod", (None, "@prod")),
        ("@.x", (None, "@.x")),
        ("@prod.", (None, "@prod.")),
    ])
    def test_split(self, key, expected):
        assert split_tagged_key(key) == expected

    def test_custom_prefix(self):
        assert split_tagged_key("%test.k", tag_prefix="%") == ("test", "k")


class TestPropertiesStore:
    def test_reads_tagged_and_untagged(self, write_file):
        path = write_file("app.properties", "db.url=localhost\n@production.db.url=prod-db\n")
        store = PropertiesStore().add_resource(path)

        assert store.entries() == (
            Entry("db.url", "localhost"),
            Entry("db.url", "prod-db", "production"),
        )

    def test_resources_in_order(self, write_file):
        first = write_file("first.properties", "k=1")
        second = write_file("second.properties", "k=2")
        store = PropertiesStore().add_resource(first).add_resource(second)

        assert [entry.value for entry in store.entries()] == ["1", "2"]
        assert store.resources == [first, second]

    def test_missing_resource_fails(self, tmp_path):
        store = PropertiesStore().add_resource(tmp_path / "absent.properties")

        with pytest.raises(StoreInitializationError) as exc_info:
            store.load()
        assert exc_info.value.store == "PropertiesStore"
        assert exc_info.value.config_file.endswith("absent.properties")
        assert not store.is_loaded

    def test_optional_missing_resource_skipped(self, tmp_path, write_file):
        present = write_file("present.properties", "k=v")
        store = (PropertiesStore()
                 .add_resource(tmp_path / "absent.properties", optional=True)
                 .add_resource(present))

        assert store.entries() == (Entry("k", "v"),)

    def test_malformed_file_reports_path(self, write_file):
        path = write_file("bad.properties", "k=\\uZZZZ")
        store = PropertiesStore().add_resource(path)

        with pytest.raises(StoreInitializationError) as exc_info:
            store.load()
        assert exc_info.value.config_file == str(path)

    def test_failed_load_is_retried(self, tmp_path):
        path = tmp_path / "later.properties"
        store = PropertiesStore().add_resource(path)

        with pytest.raises(StoreInitializationError):
            store.load()

        path.write_text("k=v", encoding="utf-8")
        assert store.entries() == (Entry("k", "v"),)

    def test_cannot_add_after_load(self, write_file):
        store = PropertiesStore().add_resource(write_file("a.properties", "k=v"))
        store.load()

        with pytest.raises(ConfigurationError):
            store.add_resource("b.properties")

    def test_encoding(self, tmp_path):
        path = tmp_path / "latin.properties"
        path.write_bytes("name=caf\xe9".encode("latin-1"))

        store = PropertiesStore(encoding="latin-1").add_resource(path)
        assert store.entries() == (Entry("name", "caf\xe9"),)
