import pytest

from posesampler.Random import RandomEngine as random_engine
from posesampler.Random.RandomEngine import RandomEngine, SeedFactory


@pytest.fixture
def seed_factory():
    return SeedFactory(seed=42)


@pytest.fixture
def engine(seed_factory):
    return RandomEngine(seed_factory=seed_factory)


@pytest.fixture(autouse=True)
def restore_process_seed():
    """Tests that touch the process-wide seed must not leak it to other tests."""
    factory = random_engine.default_seed_factory()
    was_fixed = factory.has_fixed_seed
    seed = factory.get_seed()
    yield
    if was_fixed:
        factory.set_seed(seed)
    else:
        factory.clear_seed()
