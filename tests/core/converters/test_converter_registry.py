import threading
from enum import Enum, IntEnum

import numpy as np
import pytest

from tagconf.core.base.exceptions import ConversionError, UnsupportedTypeError
from tagconf.core.base.types import Locale
from tagconf.core.converters.base import ValueConverter
from tagconf.core.converters.builtin import EnumValueConverter, IntegerValueConverter
from tagconf.core.converters.registry import (
    ValueConverterRegistry,
    get_global_registry,
    register_custom_converter,
    reset_global_registry,
)


class Point:
    def __init__(self, x, y):
        self.x, self.y = x, y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)


class PointConverter(ValueConverter[Point]):
    def from_string(self, value):
        x, y = value.split(",")
        return Point(int(x), int(y))

    def to_string(self, value):
        return f"{value.x},{value.y}"


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Mode(Enum):
    FAST = "fast"


class TestResolution:
    def test_builtin_types_registered(self):
        registry = ValueConverterRegistry()
        for target_type in (bool, np.int8, np.int16, np.int32, np.int64, int,
                            np.float32, np.float64, float, str, Locale):
            assert target_type in registry

    def test_empty_registry(self):
        registry = ValueConverterRegistry(include_defaults=False)
        assert len(registry) == 0
        with pytest.raises(UnsupportedTypeError):
            registry.resolve(str)

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            ValueConverterRegistry().resolve(Point)
        assert exc_info.value.target_type is Point

    def test_enum_converter_derived(self):
        converter = ValueConverterRegistry().resolve(Mode)
        assert isinstance(converter, EnumValueConverter)
        assert converter.from_string("FAST") is Mode.FAST

    def test_int_enum_does_not_use_int_converter(self):
        registry = ValueConverterRegistry()
        assert registry.convert(Level, "HIGH") is Level.HIGH
        with pytest.raises(ConversionError):
            registry.convert(Level, "2")

    def test_no_supertype_fallback(self):
        class Subclass(str):
            pass

        with pytest.raises(UnsupportedTypeError):
            ValueConverterRegistry().resolve(Subclass)

    def test_bool_is_not_int(self):
        registry = ValueConverterRegistry()
        assert registry.convert(bool, "true") is True
        with pytest.raises(ConversionError):
            registry.convert(bool, "1")

    def test_registered_enum_converter_takes_precedence(self):
        class LowerModeConverter(ValueConverter[Mode]):
            def from_string(self, value):
                return Mode(value)

            def to_string(self, value):
                return value.value

        registry = ValueConverterRegistry()
        registry.register(Mode, LowerModeConverter())
        assert registry.convert(Mode, "fast") is Mode.FAST


class TestRegistration:
    def test_register_and_convert(self):
        registry = ValueConverterRegistry()
        registry.register(Point, PointConverter())
        assert registry.convert(Point, "1,2") == Point(1, 2)
        assert registry.serialize(Point(3, 4)) == "3,4"

    def test_register_replaces(self):
        registry = ValueConverterRegistry()
        replacement = IntegerValueConverter(np.int8)
        registry.register(int, replacement)
        assert registry.resolve(int) is replacement
        with pytest.raises(ConversionError):
            registry.convert(int, "1000")

    def test_register_rejects_non_converter(self):
        with pytest.raises(TypeError):
            ValueConverterRegistry().register(Point, lambda value: Point(0, 0))

    def test_unregister(self):
        registry = ValueConverterRegistry()
        registry.register(Point, PointConverter())
        registry.unregister(Point)
        assert Point not in registry
        registry.unregister(Point)

    def test_reset_restores_builtins(self):
        registry = ValueConverterRegistry()
        registry.register(Point, PointConverter())
        registry.unregister(str)
        registry.reset()
        assert Point not in registry
        assert str in registry

    def test_wraps_foreign_exceptions(self):
        registry = ValueConverterRegistry()
        registry.register(Point, PointConverter())
        with pytest.raises(ConversionError) as exc_info:
            registry.convert(Point, "not a point")
        assert isinstance(exc_info.value.cause, ValueError)
        assert exc_info.value.target_type is Point

    def test_serialize_with_explicit_type(self):
        registry = ValueConverterRegistry()
        assert registry.serialize(np.int8(5), np.int8) == "5"
        assert registry.serialize(True) == "true"

    def test_concurrent_registration(self):
        registry = ValueConverterRegistry(include_defaults=False)
        types = [type(f"Custom{i}", (), {}) for i in range(50)]
        barrier = threading.Barrier(len(types))

        def register(target_type):
            barrier.wait()
            registry.register(target_type, PointConverter())

        threads = [threading.Thread(target=register, args=(t,)) for t in types]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == len(types)


class TestGlobalRegistry:
    def test_register_custom_converter(self):
        register_custom_converter(Point, PointConverter())
        assert get_global_registry().convert(Point, "5,6") == Point(5, 6)

    def test_reset_global_registry(self):
        register_custom_converter(Point, PointConverter())
        reset_global_registry()
        with pytest.raises(UnsupportedTypeError):
            get_global_registry().resolve(Point)
