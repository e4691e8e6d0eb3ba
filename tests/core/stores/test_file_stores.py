import json

import pytest

from tagconf.core.base.exceptions import StoreInitializationError
from tagconf.core.base.types import Entry
from tagconf.core.config.settings import update_settings
from tagconf.core.stores.ini import IniFileConfigurationStore
from tagconf.core.stores.structured import StructuredFileStore, flatten


INI_TEXT = """
[default]
db.url = localhost
db.port = 5432

[production]
db.url = prod-db

[test]
db.url = test-db
"""


class TestIniFileConfigurationStore:
    def test_sections_become_tags(self, write_file):
        store = IniFileConfigurationStore().add_resource(write_file("app.ini", INI_TEXT))

        assert store.entries() == (
            Entry("db.url", "localhost"),
            Entry("db.port", "5432"),
            Entry("db.url", "prod-db", "production"),
            Entry("db.url", "test-db", "test"),
        )

    def test_key_case_preserved(self, write_file):
        store = IniFileConfigurationStore().add_resource(write_file("app.ini", "[default]\nMaxSize = 10\n"))
        assert store.entries() == (Entry("MaxSize", "10"),)

    def test_no_interpolation(self, write_file):
        store = IniFileConfigurationStore().add_resource(write_file("app.ini", "[default]\nfmt = %(name)s\n"))
        assert store.entries() == (Entry("fmt", "%(name)s"),)

    def test_uppercase_default_is_a_tag(self, write_file):
        store = IniFileConfigurationStore().add_resource(write_file("app.ini", "[DEFAULT]\nk = v\n"))
        assert store.entries() == (Entry("k", "v", "DEFAULT"),)

    def test_custom_default_section(self, write_file):
        path = write_file("app.ini", "[common]\nk = 1\n[default]\nk = 2\n")
        store = IniFileConfigurationStore(default_section="common").add_resource(path)

        assert store.entries() == (Entry("k", "1"), Entry("k", "2", "default"))

    def test_default_section_from_settings(self, write_file):
        update_settings(default_section="base")
        store = IniFileConfigurationStore().add_resource(write_file("app.ini", "[base]\nk = 1\n"))
        assert store.entries() == (Entry("k", "1"),)

    def test_malformed_file(self, write_file):
        store = IniFileConfigurationStore().add_resource(write_file("bad.ini", "no section header\n"))

        with pytest.raises(StoreInitializationError) as exc_info:
            store.load()
        assert exc_info.value.config_file.endswith("bad.ini")


class TestFlatten:
    def test_nested(self):
        data = {"db": {"url": "x", "pool": {"size": 5}}, "debug": True, "hosts": ["a", "b"], "skip": None}
        assert list(flatten(data)) == [
            ("db.url", "x"),
            ("db.pool.size", "5"),
            ("debug", "true"),
            ("hosts", "a,b"),
        ]


class TestStructuredFileStore:
    def test_yaml(self, write_file):
        path = write_file("app.yaml", (
            "db:\n"
            "  url: localhost\n"
            "  port: 5432\n"
            "debug: false\n"
            "'@production':\n"
            "  db:\n"
            "    url: prod-db\n"
        ))
        store = StructuredFileStore().add_resource(path)

        assert store.entries() == (
            Entry("db.url", "localhost"),
            Entry("db.port", "5432"),
            Entry("debug", "false"),
            Entry("db.url", "prod-db", "production"),
        )

    def test_json(self, write_file):
        path = write_file("app.json", json.dumps({
            "@test": {"server": {"port": 9090}},
            "server": {"port": 8080},
        }))
        store = StructuredFileStore().add_resource(path)

        assert store.entries() == (
            Entry("server.port", "8080"),
            Entry("server.port", "9090", "test"),
        )

    def test_toml(self, write_file):
        path = write_file("app.toml", (
            "name = \"demo\"\n"
            "[server]\n"
            "port = 8080\n"
            "[\"@production\"]\n"
            "name = \"demo-prod\"\n"
        ))
        store = StructuredFileStore().add_resource(path)

        assert store.entries() == (
            Entry("name", "demo"),
            Entry("server.port", "8080"),
            Entry("name", "demo-prod", "production"),
        )

    def test_empty_yaml(self, write_file):
        store = StructuredFileStore().add_resource(write_file("empty.yml", ""))
        assert store.entries() == ()

    def test_tagged_section_must_be_mapping(self, write_file):
        store = StructuredFileStore().add_resource(write_file("app.yaml", "'@production': 5\n"))

        with pytest.raises(StoreInitializationError, match="must be a mapping"):
            store.load()

    def test_top_level_must_be_mapping(self, write_file):
        store = StructuredFileStore().add_resource(write_file("app.json", "[1, 2]"))

        with pytest.raises(StoreInitializationError):
            store.load()

    def test_unsupported_extension(self, write_file):
        store = StructuredFileStore().add_resource(write_file("app.xml", "<a/>"))

        with pytest.raises(StoreInitializationError, match="Unsupported"):
            store.load()

    def test_invalid_yaml(self, write_file):
        store = StructuredFileStore().add_resource(write_file("app.yaml", "key: [unclosed\n"))

        with pytest.raises(StoreInitializationError):
            store.load()
