"""
Fluent builder for TagConf configurations.

Examples
--------
>>> configuration = (
...     ConfigurationBuilder()
...     .add_current_tag("production")
...     .create_properties_store()
...         .add_resource("app.properties")
...         .done()
...     .create_ini_file_configuration_store()
...         .add_resource("app.ini")
...         .done()
...     .create_system_properties_store()
...     .get_configuration()
... )
>>> configuration.evaluate_to_int("server.port")
"""

from pathlib import Path
from typing import Any, Optional, Union

from .core.configuration import Configuration
from .core.converters.registry import ValueConverterRegistry
from .core.provider import ConfigurationProvider
from .core.resolver import ConfigurationContextResolver, DefaultConfigurationContextResolver
from .core.stores.base import ConfigurationStore, FileResourceStore
from .core.stores.encrypted import EncryptedPropertiesStore
from .core.stores.ini import IniFileConfigurationStore
from .core.stores.objects import ObjectConfigurationStore
from .core.stores.properties import PropertiesStore
from .core.stores.structured import StructuredFileStore
from .core.stores.system import SystemPropertiesStore


class _StoreBuilder:
    """Sub-builder collecting one store before handing it to the parent."""

    def __init__(self, parent: "ConfigurationBuilder", store: ConfigurationStore):
        self._parent = parent
        self._store = store

    @property
    def store(self) -> ConfigurationStore:
        return self._store

    def done(self) -> "ConfigurationBuilder":
        """Register the store and return to the parent builder."""
        return self._parent.add_configuration_store(self._store)


class ResourceStoreBuilder(_StoreBuilder):
    """Sub-builder for stores reading file resources."""

    _store: FileResourceStore

    def add_resource(self, path: Union[str, Path], optional: bool = False) -> "ResourceStoreBuilder":
        self._store.add_resource(path, optional=optional)
        return self


class ObjectStoreBuilder(_StoreBuilder):
    """Sub-builder for object stores."""

    _store: ObjectConfigurationStore

    def add_object(self, obj: Any) -> "ObjectStoreBuilder":
        self._store.add_object(obj)
        return self


class ConfigurationBuilder:
    """Builds an immutable Configuration from tags and stores.

    The builder is seeded with the tags a context resolver reports; further
    tags and stores are appended in call order. ``get_configuration`` loads
    every store and freezes the result.

    Parameters
    ----------
    resolver : ConfigurationContextResolver, optional
        Source of the initial tags; defaults to reading ``TAGCONF_TAGS``
    registry : ValueConverterRegistry, optional
        Converter registry for the built configuration; defaults to the
        process-wide registry
    """

    def __init__(self, resolver: Optional[ConfigurationContextResolver] = None,
                 registry: Optional[ValueConverterRegistry] = None):
        self._provider = ConfigurationProvider(registry=registry)
        self._registry = registry
        resolver = resolver or DefaultConfigurationContextResolver()
        for tag in resolver.get_tags():
            self.add_current_tag(tag)

    @property
    def provider(self) -> ConfigurationProvider:
        return self._provider

    def add_current_tag(self, tag: str) -> "ConfigurationBuilder":
        self._provider.add_tag(tag)
        return self

    def add_configuration_store(self, store: ConfigurationStore) -> "ConfigurationBuilder":
        self._provider.add_store(store)
        return self

    def create_system_properties_store(self) -> "ConfigurationBuilder":
        return self.add_configuration_store(SystemPropertiesStore())

    def create_properties_store(self) -> ResourceStoreBuilder:
        return ResourceStoreBuilder(self, PropertiesStore())

    def create_encrypted_properties_store(self, password_property: str) -> ResourceStoreBuilder:
        return ResourceStoreBuilder(self, EncryptedPropertiesStore(password_property))

    def create_ini_file_configuration_store(self) -> ResourceStoreBuilder:
        return ResourceStoreBuilder(self, IniFileConfigurationStore())

    def create_structured_file_store(self) -> ResourceStoreBuilder:
        return ResourceStoreBuilder(self, StructuredFileStore())

    def create_object_configuration_store(self) -> ObjectStoreBuilder:
        return ObjectStoreBuilder(self, ObjectConfigurationStore(registry=self._registry))

    def get_configuration(self) -> Configuration:
        """Finalize into an immutable Configuration.

        Raises
        ------
        StoreInitializationError
            If any store fails to populate
        """
        return self._provider.get_configuration()
