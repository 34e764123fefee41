import math
import threading

import numpy as np
import pytest

from posesampler.Random import RandomEngine as random_engine
from posesampler.Random.RandomEngine import HalfNormalConfig, RandomEngine, SeedFactory
from posesampler.Utils.TransformUtils import rotate_vector

N = 20000


def _draw_sequence(engine):
    return [
        engine.uniform01(),
        engine.uniform_real(-3.0, 7.0),
        engine.uniform_int(0, 9),
        engine.uniform_bool(),
        engine.gaussian(1.0, 2.0),
        engine.half_normal_real(0.0, 5.0),
        engine.half_normal_int(1, 10),
        *engine.quaternion().tolist(),
        *engine.disk(0.5, 1.0).tolist(),
        *engine.ball(0.0, 2.0).tolist(),
    ]


def test_same_seed_same_sequence():
    assert _draw_sequence(RandomEngine(seed=7)) == _draw_sequence(RandomEngine(seed=7))


def test_different_seeds_differ():
    assert _draw_sequence(RandomEngine(seed=7)) != _draw_sequence(RandomEngine(seed=8))


def test_fixed_seed_factories_reproduce():
    a = SeedFactory(5)
    b = SeedFactory(5)
    engines_a = [RandomEngine(seed_factory=a) for _ in range(3)]
    engines_b = [RandomEngine(seed_factory=b) for _ in range(3)]
    for ea, eb in zip(engines_a, engines_b):
        assert ea.seed == eb.seed
        assert _draw_sequence(ea) == _draw_sequence(eb)
    assert len({e.seed for e in engines_a}) == 3


def test_process_wide_seed_reproduces():
    random_engine.set_seed(11)
    assert random_engine.get_seed() == 11
    first = _draw_sequence(RandomEngine())
    random_engine.set_seed(11)
    second = _draw_sequence(RandomEngine())
    assert first == second


def test_process_wide_seed_logs(caplog):
    with caplog.at_level("INFO"):
        random_engine.set_seed(3)
    assert "fixed to 3" in caplog.text


def test_auto_seed_can_be_replayed():
    factory = SeedFactory()
    assert not factory.has_fixed_seed
    seeds = [factory.next_seed() for _ in range(4)]
    replay = SeedFactory(factory.get_seed())
    assert [replay.next_seed() for _ in range(4)] == seeds


def test_set_seed_restarts_sequence(seed_factory):
    seeds = [seed_factory.next_seed() for _ in range(3)]
    seed_factory.set_seed(42)
    assert [seed_factory.next_seed() for _ in range(3)] == seeds


def test_concurrent_construction_gives_distinct_seeds():
    factory = SeedFactory()
    seeds = []
    lock = threading.Lock()

    def build():
        local = [RandomEngine(seed_factory=factory).seed for _ in range(50)]
        with lock:
            seeds.extend(local)

    threads = [threading.Thread(target=build) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(seeds) == 400
    assert len(set(seeds)) == 400


@pytest.mark.parametrize("seed", [-1, 2**32])
def test_invalid_seed(seed):
    with pytest.raises(ValueError):
        RandomEngine(seed=seed)
    with pytest.raises(ValueError):
        SeedFactory(seed)


def test_invalid_rng():
    with pytest.raises(AssertionError, match="Invalid RNG"):
        RandomEngine(rng=np.random.default_rng(0))


def test_wrapped_rng_and_reseed():
    engine = RandomEngine(rng=np.random.RandomState(9))
    assert engine.seed is None
    first = _draw_sequence(engine)
    engine.reseed(9)
    assert engine.seed == 9
    assert _draw_sequence(engine) == first


def test_uniform_real(engine):
    lo, hi = 2.0, 5.0
    draws = np.array([engine.uniform_real(lo, hi) for _ in range(N)])
    assert np.all(draws >= lo)
    assert np.all(draws < hi)
    assert draws.mean() == pytest.approx((lo + hi) / 2, abs=0.05)


def test_uniform_real_degenerate(engine):
    assert engine.uniform_real(1.5, 1.5) == 1.5


def test_uniform_int(engine):
    draws = np.array([engine.uniform_int(-2, 2) for _ in range(N)])
    values, counts = np.unique(draws, return_counts=True)
    assert values.tolist() == [-2, -1, 0, 1, 2]
    assert np.all(np.abs(counts / N - 0.2) < 0.02)


def test_uniform_int_clamps_rounding(engine, monkeypatch):
    # u = 1.0 is the worst case rounding can produce for hi + 1
    monkeypatch.setattr(engine, "uniform01", lambda: 1.0)
    assert engine.uniform_real(0.0, 4.0) == 4.0
    assert engine.uniform_int(0, 3) == 3


def test_uniform_bool(engine):
    draws = [engine.uniform_bool() for _ in range(N)]
    assert sum(draws) / N == pytest.approx(0.5, abs=0.02)


def test_gaussian(engine):
    draws = np.array([engine.gaussian(3.0, 0.5) for _ in range(N)])
    assert draws.mean() == pytest.approx(3.0, abs=0.02)
    assert draws.std() == pytest.approx(0.5, abs=0.02)


def test_gaussian01(engine):
    draws = np.array([engine.gaussian01() for _ in range(N)])
    assert draws.mean() == pytest.approx(0.0, abs=0.03)
    assert draws.var() == pytest.approx(1.0, abs=0.05)


def test_half_normal_real_biased_towards_upper(engine):
    r_min, r_max = 0.0, 10.0
    draws = np.array([engine.half_normal_real(r_min, r_max) for _ in range(N)])
    assert np.all(draws >= r_min)
    assert np.all(draws <= r_max)
    mean = draws.mean()
    assert abs(mean - r_max) < abs(mean - (r_min + r_max) / 2)
    # folded normal: r_max - sigma * sqrt(2 / pi)
    assert mean == pytest.approx(r_max - (10.0 / 3.0) * math.sqrt(2 / math.pi), abs=0.1)


def test_half_normal_focus_sharpens(engine):
    loose = np.mean([engine.half_normal_real(0.0, 1.0, focus=1.5) for _ in range(5000)])
    sharp = np.mean(
        [engine.half_normal_real(0.0, 1.0, HalfNormalConfig(focus=10.0)) for _ in range(5000)]
    )
    assert sharp > loose


def test_half_normal_invalid_focus(engine):
    with pytest.raises(ValueError):
        engine.half_normal_real(0.0, 1.0, focus=0.0)
    with pytest.raises(ValueError):
        HalfNormalConfig(focus=-1.0)


def test_half_normal_int(engine):
    draws = np.array([engine.half_normal_int(1, 6) for _ in range(N)])
    assert draws.min() >= 1
    assert draws.max() <= 6
    counts = np.bincount(draws, minlength=7)
    assert counts[6] > counts[1]


def test_half_normal_int_clamps_upper(engine, monkeypatch):
    # zero deviation lands exactly on r_max + 1 before the clamp
    monkeypatch.setattr(engine, "gaussian01", lambda: 0.0)
    assert engine.half_normal_int(2, 5) == 5


def test_quaternion_unit_norm(engine):
    quats = np.array([engine.quaternion() for _ in range(10000)])
    assert np.all(np.abs(np.sum(quats**2, axis=1) - 1.0) < 1e-9)


def test_quaternion_covers_sphere_uniformly(engine):
    quats = np.array([engine.quaternion() for _ in range(N)])
    rotated = rotate_vector(quats, np.array([0.0, 0.0, 1.0]))
    # each coordinate of a uniform point on the sphere is uniform in [-1, 1]
    for axis in range(3):
        counts, _ = np.histogram(rotated[:, axis], bins=10, range=(-1.0, 1.0))
        assert np.all(np.abs(counts / N - 0.1) < 0.015)


def test_euler_rpy_range(engine):
    angles = np.array([engine.euler_rpy() for _ in range(1000)])
    assert angles.shape == (1000, 3)
    assert np.all(angles >= -math.pi)
    assert np.all(angles < math.pi)


def test_disk_in_annulus_and_area_uniform(engine):
    r_min, r_max = 1.0, 3.0
    points = np.array([engine.disk(r_min, r_max) for _ in range(N)])
    radii = np.linalg.norm(points, axis=1)
    assert np.all(radii >= r_min - 1e-12)
    assert np.all(radii <= r_max + 1e-12)
    # half the area lies inside sqrt((r_min^2 + r_max^2) / 2)
    inner = np.mean(radii < math.sqrt((r_min**2 + r_max**2) / 2))
    assert inner == pytest.approx(0.5, abs=0.02)


def test_ball_within_radius(engine):
    points = np.array([engine.ball(0.0, 2.0) for _ in range(N)])
    radii = np.linalg.norm(points, axis=1)
    assert np.all(radii <= 2.0 + 1e-12)
    inner = np.mean(radii**3 < 4.0)
    assert inner == pytest.approx(0.5, abs=0.02)


def test_ball_on_sphere(engine):
    points = np.array([engine.ball(1.5, 1.5) for _ in range(1000)])
    assert np.allclose(np.linalg.norm(points, axis=1), 1.5, atol=1e-9)


@pytest.mark.parametrize("r_min, r_max", [(0.0, -1.0), (-0.5, 1.0), (2.0, 1.0)])
def test_bad_radii(engine, r_min, r_max):
    with pytest.raises(ValueError):
        engine.disk(r_min, r_max)
    with pytest.raises(ValueError):
        engine.ball(r_min, r_max)


def test_uniform_real_rejects_inverted_bounds(engine):
    with pytest.raises(AssertionError):
        engine.uniform_real(1.0, 0.0)
