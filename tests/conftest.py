import pytest

from config import config
from tests.helpers.transactions import DEFAULT_DAY_GEN


@pytest.fixture(autouse=True)
def _reset_default_day_gen() -> None:
    DEFAULT_DAY_GEN.reset()


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    config.cache_clear()
