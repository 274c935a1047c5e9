# pytest tests/test_route_sampler.py -q

import pytest

from crime_route_ranking.algorithms.sampling import RouteSampler
from crime_route_ranking.config.ranking_config import RankingConfig


@pytest.fixture
def sampler():
    return RouteSampler(RankingConfig())


def test_short_route_keeps_every_point(sampler):
    coordinates = [(float(i), float(i)) for i in range(10)]
    assert sampler.sample(coordinates) == coordinates


def test_exactly_max_samples_keeps_every_point(sampler):
    coordinates = list(range(50))
    assert sampler.sample(coordinates) == coordinates


def test_long_route_uses_fixed_stride(sampler):
    coordinates = list(range(500))
    samples = sampler.sample(coordinates)

    assert len(samples) == 50
    assert samples[0] == 0
    assert samples[1] == 10
    assert samples[-1] == 490


@pytest.mark.parametrize("n", [51, 99, 120, 149, 1000, 1049])
def test_samples_reach_end_of_route(sampler, n):
    coordinates = list(range(n))
    samples = sampler.sample(coordinates)
    stride = samples[1] - samples[0]

    assert len(samples) <= 50
    assert samples == coordinates[::stride]
    assert n - 1 - samples[-1] < stride


def test_uneven_length_spreads_over_whole_route(sampler):
    # ceil(149 / 50) = 3
    samples = sampler.sample(list(range(149)))

    assert len(samples) == 50
    assert samples[-1] == 147


def test_empty_route(sampler):
    assert sampler.sample([]) == []


def test_single_point(sampler):
    assert sampler.sample([(-87.63, 41.88)]) == [(-87.63, 41.88)]


def test_deterministic(sampler):
    coordinates = tuple((i * 0.001, i * 0.002) for i in range(333))
    assert sampler.sample(coordinates) == sampler.sample(coordinates)


def test_custom_max_samples():
    sampler = RouteSampler(RankingConfig(max_samples=4))
    assert sampler.sample(list(range(9))) == [0, 3, 6]
