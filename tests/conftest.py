import pytest

from tagconf.core.config.settings import reset_settings
from tagconf.core.converters.registry import reset_global_registry
from tagconf.core.log_manager import reset_logging


@pytest.fixture(autouse=True)
def clean_global_state():
    """Each test starts from default settings and built-in converters."""
    reset_settings()
    reset_global_registry()
    yield
    reset_logging()
    reset_global_registry()
    reset_settings()


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write

