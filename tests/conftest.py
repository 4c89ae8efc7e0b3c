import pytest

from waila.core.settings import settings

settings.debug = True
settings.log_level = "TRACE"
settings.max_input_length = 100_000


@pytest.fixture
def max_input_length():
    default = settings.max_input_length
    yield settings
    settings.max_input_length = default
