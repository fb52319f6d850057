"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/                  # Fast, isolated tests (mocks, in-memory)
    │   ├── authkit_core/
    │   ├── authkit_tokens/
    │   ├── authkit_local/
    │   ├── authkit_social/
    │   ├── authkit_config/
    │   └── authkit_cli/
    └── integration/           # Persistence tests on in-memory SQLite
        └── authkit_tokens/
"""

import pytest

from authkit_config import clear_settings_cache
from authkit_tokens import get_default_container


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )


@pytest.fixture(autouse=True)
def isolate_global_state():
    """Keep cached settings and the default token container out of other tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()
    get_default_container().reset()
