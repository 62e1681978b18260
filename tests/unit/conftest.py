import pytest


@pytest.fixture(params=["memory"])
def stores(request):
    """Unit tests only run against the in-memory backend."""
    from scouts.db.stores import create_memory_stores

    bundle = create_memory_stores()
    yield bundle
    bundle.reset()
