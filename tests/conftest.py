import pytest

from services.models import Sample


@pytest.fixture
def series():
    def make(*prices, start=1_700_000_000, step=60):
        return [Sample(p, start + i * step) for i, p in enumerate(prices)]
    return make
