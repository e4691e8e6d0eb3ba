import pytest

from tagconf.core.base.exceptions import MissingPropertyError, StoreInitializationError
from tagconf.core.configuration import Configuration
from tagconf.core.converters.registry import ValueConverterRegistry, get_global_registry
from tagconf.core.provider import ConfigurationProvider, iter_matches, resolve_value
from tagconf.core.stores.memory import InMemoryStore
from tagconf.core.stores.properties import PropertiesStore


def make_provider(tags, *stores):
    provider = ConfigurationProvider()
    for tag in tags:
        provider.add_tag(tag)
    for store in stores:
        provider.add_store(store)
    return provider


class TestTagOrderedMerge:
    def test_tagged_entry_beats_untagged(self):
        untagged = InMemoryStore({"K": "1"})
        tagged = InMemoryStore({"K": "2"}, tag="test")

        assert make_provider(["test"], untagged, tagged).resolve("K") == "2"
        assert make_provider([], untagged, tagged).resolve("K") == "1"

    def test_inactive_tag_is_ignored(self):
        provider = make_provider(["prod"], InMemoryStore({"K": "1"}), InMemoryStore({"K": "2"}, tag="test"))
        assert provider.resolve("K") == "1"

    def test_earlier_store_wins_ties(self):
        first = InMemoryStore({"K": "a"})
        second = InMemoryStore({"K": "b"})
        assert make_provider([], first, second).resolve("K") == "a"

    def test_tag_order_dominates_store_order(self):
        first = InMemoryStore({"K": "from-general"}, tag="general")
        second = InMemoryStore({"K": "from-specific"}, tag="specific")

        provider = make_provider(["specific", "general"], first, second)
        assert provider.resolve("K") == "from-specific"

    def test_same_tag_earlier_store_wins(self):
        first = InMemoryStore({"K": "a"}, tag="t")
        second = InMemoryStore({"K": "b"}, tag="t")
        assert make_provider(["t"], first, second).resolve("K") == "a"

    def test_entries_within_a_store_keep_order(self):
        store = InMemoryStore().add("K", "first").add("K", "second")
        assert make_provider([], store).resolve("K") == "first"

    def test_missing_key(self):
        provider = make_provider(["test"], InMemoryStore({"other": "1"}))

        with pytest.raises(MissingPropertyError) as exc_info:
            provider.resolve("K")
        assert exc_info.value.key == "K"
        assert exc_info.value.tags == ("test",)

    def test_missing_when_only_inactive_tag_holds_key(self):
        provider = make_provider([], InMemoryStore({"K": "1"}, tag="test"))
        with pytest.raises(MissingPropertyError):
            provider.resolve("K")


class TestResolveAll:
    def test_priority_order(self):
        stores = [
            InMemoryStore({"K": "u1"}),
            InMemoryStore({"K": "general"}, tag="general"),
            InMemoryStore({"K": "specific"}, tag="specific"),
            InMemoryStore({"K": "u2"}),
        ]
        provider = make_provider(["specific", "general"], *stores)
        assert provider.resolve_all("K") == ["specific", "general", "u1", "u2"]

    def test_empty_when_absent(self):
        assert make_provider([], InMemoryStore()).resolve_all("K") == []

    def test_duplicate_tag_scanned_once(self):
        provider = make_provider(["t", "t"], InMemoryStore({"K": "x"}, tag="t"))
        assert provider.resolve_all("K") == ["x"]

    def test_duplicate_tag_keeps_first_position(self):
        provider = make_provider(
            ["a", "b", "a"],
            InMemoryStore({"K": "from-b"}, tag="b"),
            InMemoryStore({"K": "from-a"}, tag="a"),
            InMemoryStore({"K": "plain"}),
        )
        assert provider.resolve_all("K") == ["from-a", "from-b", "plain"]
        assert provider.resolve("K") == "from-a"

    def test_module_level_helpers(self):
        stores = [InMemoryStore({"K": "1"})]
        assert list(iter_matches("K", [], stores)) == ["1"]
        assert resolve_value("K", [], stores) == "1"

    def test_has_value(self):
        provider = make_provider([], InMemoryStore({"K": ""}))
        assert provider.has_value("K")
        assert not provider.has_value("missing")


class TestProvider:
    def test_rejects_empty_tag(self):
        with pytest.raises(ValueError):
            ConfigurationProvider().add_tag("")

    def test_rejects_non_store(self):
        with pytest.raises(TypeError):
            ConfigurationProvider().add_store({"K": "1"})

    def test_registry_defaults_to_global(self):
        assert ConfigurationProvider().registry is get_global_registry()
        private = ValueConverterRegistry()
        assert ConfigurationProvider(registry=private).registry is private

    def test_empty_registry_is_not_replaced(self):
        empty = ValueConverterRegistry(include_defaults=False)
        assert ConfigurationProvider(registry=empty).registry is empty

    def test_get_configuration_loads_all_stores(self):
        first, second = InMemoryStore({"a": "1"}), InMemoryStore({"b": "2"})
        configuration = make_provider(["t"], first, second).get_configuration()

        assert isinstance(configuration, Configuration)
        assert first.is_loaded and second.is_loaded
        assert configuration.tags == ("t",)

    def test_get_configuration_surfaces_store_errors(self, tmp_path):
        broken = PropertiesStore().add_resource(tmp_path / "absent.properties")
        provider = make_provider([], InMemoryStore({"a": "1"}), broken)

        with pytest.raises(StoreInitializationError):
            provider.get_configuration()

    def test_configuration_is_isolated_from_later_changes(self):
        provider = make_provider(["t"], InMemoryStore({"K": "1"}))
        configuration = provider.get_configuration()

        provider.add_tag("other")
        provider.add_store(InMemoryStore({"K": "2"}, tag="other"))

        assert configuration.tags == ("t",)
        assert len(configuration.stores) == 1
        assert configuration.resolve("K") == "1"
