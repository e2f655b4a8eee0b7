import pytest

from catalog.database import STORE, seed_products


@pytest.fixture(autouse=True)
def seeded_store():
    """Every test starts from the seed catalog."""
    STORE.reset(seed_products())
    yield STORE
    STORE.reset(seed_products())
