import math

import numpy as np
import pytest

from gaussian_noise import NoiseSource, gaussian_random, shared_noise_source


class FixedDraws:
    """Generator stand-in returning queued `random()` and `uniform()` values."""

    def __init__(self, randoms, uniforms):
        self.randoms = list(randoms)
        self.uniforms = list(uniforms)

    def random(self):
        return self.randoms.pop(0)

    def uniform(self, low, high):
        return self.uniforms.pop(0)


def test_statistics_of_many_samples():
    source = NoiseSource(np.random.default_rng(1234))
    samples = source.sample(100_000)
    assert abs(samples.mean()) < 0.05
    assert abs(samples.var() - 1.0) < 0.1


def test_pair_is_cos_then_sin_and_cached():
    u, v = 0.25, 1.0
    source = NoiseSource(FixedDraws([u], [v]))
    r = math.sqrt(-2.0 * math.log(u))

    first = source.next()
    assert first == pytest.approx(r * math.cos(v))
    assert source.spare == pytest.approx(r * math.sin(v))

    second = source.next()
    assert second == pytest.approx(r * math.sin(v))
    assert source.spare is None


def test_fresh_pair_only_every_other_call():
    draws = FixedDraws([0.5, 0.7], [0.3, 2.0])
    source = NoiseSource(draws)
    source.next()
    source.next()
    assert draws.randoms == [0.7]
    source.next()
    assert draws.randoms == []


def test_zero_uniform_is_resampled():
    draws = FixedDraws([0.0, 0.0, 0.5], [0.0])
    source = NoiseSource(draws)
    value = source.next()
    assert value == pytest.approx(math.sqrt(-2.0 * math.log(0.5)))
    assert draws.randoms == []


def test_seeded_sources_are_reproducible():
    a = NoiseSource(7).sample(10)
    b = NoiseSource(7).sample(10)
    assert np.array_equal(a, b)


def test_sample_rejects_negative_count():
    with pytest.raises(ValueError):
        NoiseSource(0).sample(-1)


def test_shared_source_is_a_singleton():
    assert shared_noise_source() is shared_noise_source()
    assert math.isfinite(gaussian_random())


def test_injected_source_is_used_as_given():
    class Recording(FixedDraws):
        def uniform(self, low, high):
            self.bounds = (low, high)
            return super().uniform(low, high)

    draws = Recording([0.25], [1.0])
    source = NoiseSource(draws)
    assert source.next() == pytest.approx(math.sqrt(-2.0 * math.log(0.25)) * math.cos(1.0))
    assert draws.bounds == (0.0, pytest.approx(2.0 * math.pi))
