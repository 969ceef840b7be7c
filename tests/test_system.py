
import sys
import os
import copy
import random
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import mandatelib
from mandatelib import system
from mandatelib.candidate import DISPUTED
from mandatelib.district import DistrictConfig
from mandatelib.evaluate.core import (
    ConfigurationWarning, InvalidConfiguration, UnsupportedMethod
)


def district(votes, seats, **kwargs):
    return {
        'seats': seats,
        'parties': [
            {'partyId': party_id, 'votes': n_votes}
            for party_id, n_votes in votes.items()
        ],
        **kwargs
    }


NORTH = district({'A': 500, 'B': 300, 'C': 200}, 10)
SOUTH = district({'A': 100, 'B': 80, 'D': 30}, 5)


def test_public_api():
    assert mandatelib.allocate is system.allocate
    assert mandatelib.aggregate is system.aggregate
    assert set(mandatelib.METHODS) == {
        'hare', 'droop', 'imperiali', 'dhondt', 'saintelague'
    }


@pytest.mark.parametrize(('method', 'expected'), [
    ('hare', {'A': 5, 'B': 3, 'C': 2}),
    ('droop', {'A': 5, 'B': 3, 'C': 2}),
    ('dhondt', {'A': 5, 'B': 3, 'C': 2}),
    ('saintelague', {'A': 5, 'B': 3, 'C': 2}),
])
def test_exact_proportion(method, expected):
    assert system.allocate(NORTH, method) == expected


@pytest.mark.parametrize(('method', 'expected'), [
    ('hare', {'A': 2, 'B': 2, 'D': 1}),
    ('dhondt', {'A': 3, 'B': 2, 'D': 0}),
])
def test_methods_differ(method, expected):
    assert system.allocate(SOUTH, method) == expected


def test_method_case_insensitive():
    assert system.allocate(NORTH, 'DHondt') == system.allocate(NORTH, 'dhondt')
    assert system.get_method('Hare').name == 'Hare Quota'


def test_method_from_config():
    config = dict(SOUTH, method='dhondt')
    assert system.allocate(config) == {'A': 3, 'B': 2, 'D': 0}
    assert system.allocate(config, 'hare') == {'A': 2, 'B': 2, 'D': 1}


def test_no_method():
    with pytest.raises(InvalidConfiguration):
        system.allocate(NORTH)


def test_unknown_method():
    with pytest.raises(UnsupportedMethod):
        system.allocate(NORTH, 'jefferson')
    with pytest.raises(KeyError):
        system.allocate(NORTH, 'jefferson')
    with pytest.raises(UnsupportedMethod):
        system.compare(NORTH, ['hare', 'adams'])


def test_invalid_district():
    with pytest.raises(InvalidConfiguration):
        system.allocate(district({'A': 10}, 0), 'hare')
    with pytest.raises(InvalidConfiguration):
        system.allocate(district({'A': -10}, 3), 'dhondt')


def test_barrier_excludes():
    config = district({'A': 900, 'B': 60, 'C': 40}, 10, barrier=0.05)
    assert system.allocate(config, 'hare') == {'A': 9, 'B': 1}
    assert 'C' not in system.allocate(config, 'dhondt')


def test_barrier_override():
    config = district({'A': 900, 'B': 60, 'C': 40}, 10, barrier=0.05)
    result = system.allocate(config, 'hare', barrier=0.5)
    assert result == {'A': 10}


def test_barrier_excludes_all():
    config = district({'A': 10, 'B': 10}, 3, barrier=1)
    assert system.allocate(config, 'hare') == {}


def test_input_unchanged():
    config = district(
        {'A': 40, 'B': 40, 'C': 20}, 3,
        barrier=0.1, tieBreak='disputed', overAllocRule='remove-small',
    )
    before = copy.deepcopy(config)
    first = system.allocate(config, 'imperiali')
    second = system.allocate(config, 'imperiali')
    assert config == before
    assert first == second
    first['A'] = 100
    assert system.allocate(config, 'imperiali') == second


def test_tie_disputed():
    config = district({'A': 500, 'B': 500}, 1, tieBreak='disputed')
    assert system.allocate(config, 'hare') == {'A': 0, 'B': 0, DISPUTED: 1}
    assert system.allocate(config, 'dhondt') == {'A': 0, 'B': 0, DISPUTED: 1}


@pytest.mark.parametrize('tie_break', ['largestVotes', 'partyIndex'])
def test_tie_deterministic(tie_break):
    config = district({'A': 500, 'B': 500}, 1, tieBreak=tie_break)
    assert system.allocate(config, 'hare') == {'A': 1, 'B': 0}


def test_tie_unknown_rule():
    config = district({'A': 500, 'B': 500}, 1, tieBreak='coinflip')
    with pytest.warns(ConfigurationWarning):
        result = system.allocate(config, 'saintelague')
    assert result == {'A': 1, 'B': 0}


def test_tie_random_seed():
    config = district({'A': 500, 'B': 500, 'C': 500}, 2, tieBreak='random')
    results = [
        system.allocate(config, 'dhondt', random_state=seed)
        for seed in range(30)
    ]
    for result in results:
        assert sum(result.values()) == 2
        assert max(result.values()) == 1
    assert len({tuple(result.values()) for result in results}) > 1
    assert system.allocate(config, 'dhondt', random_state=11) == results[11]


@pytest.mark.parametrize(('rule', 'expected'), [
    ('remove-large', {'A': 1, 'B': 1}),
    ('remove-small', {'A': 2, 'B': 0}),
    ('increase', {'A': 2, 'B': 1}),
    ('adjust-quota', {'A': 1, 'B': 1}),
])
def test_imperiali_overalloc(rule, expected):
    config = district({'A': 60, 'B': 40}, 2, overAllocRule=rule)
    assert system.allocate(config, 'imperiali') == expected


def test_overalloc_override():
    config = district({'A': 60, 'B': 40}, 2, overAllocRule='increase')
    assert system.allocate(config, 'imperiali') == {'A': 2, 'B': 1}
    result = system.allocate(
        config, 'imperiali', over_alloc_rule='remove-small'
    )
    assert result == {'A': 2, 'B': 0}


def test_overalloc_ignored_for_divisors():
    config = district({'A': 60, 'B': 40}, 2, overAllocRule='increase')
    assert system.allocate(config, 'dhondt') == {'A': 1, 'B': 1}


@pytest.mark.parametrize('method', list(system.METHODS))
def test_no_votes(method):
    config = district({'A': 0, 'B': 0}, 4)
    assert system.allocate(config, method) == {'A': 0, 'B': 0}


@pytest.mark.parametrize('method', list(system.METHODS))
def test_single_party(method):
    config = district({'A': 1234}, 7)
    assert system.allocate(config, method) == {'A': 7}


@pytest.mark.parametrize(
    'rule', ['remove-large', 'remove-small', 'adjust-quota']
)
def test_seat_conservation(rule):
    rng = random.Random(2024)
    for i in range(40):
        n_parties = rng.randint(1, 8)
        votes = {
            f'P{j}': rng.randint(1000, 100000) for j in range(n_parties)
        }
        n_seats = rng.randint(1, 30)
        config = district(votes, n_seats, overAllocRule=rule)
        for method in system.METHODS:
            result = system.allocate(config, method)
            assert sum(result.values()) == n_seats
            assert all(seats >= 0 for seats in result.values())


@pytest.mark.parametrize('method', ['hare', 'droop'])
def test_quota_lower_bound(method):
    rng = random.Random(99)
    for i in range(40):
        votes = {f'P{j}': rng.randint(1000, 50000) for j in range(5)}
        n_seats = rng.randint(1, 30)
        result = system.allocate(district(votes, n_seats), method)
        total = sum(votes.values())
        if method == 'hare':
            quota = Fraction(total, n_seats)
        else:
            quota = total // (n_seats + 1) + 1
        for party_id, n_votes in votes.items():
            assert result[party_id] >= n_votes // quota


def test_compare():
    results = system.compare(SOUTH, ['hare', 'DHONDT'])
    assert results == {
        'hare': {'A': 2, 'B': 2, 'D': 1},
        'dhondt': {'A': 3, 'B': 2, 'D': 0},
    }
    everything = system.compare(NORTH)
    assert list(everything) == list(system.METHODS)
    for method, result in everything.items():
        assert result == system.allocate(NORTH, method)


def test_aggregate():
    tally = system.aggregate([NORTH, SOUTH], ['hare', 'dhondt'])
    assert tally == {
        'hare': {'A': 7, 'B': 5, 'C': 2, 'D': 1},
        'dhondt': {'A': 8, 'B': 5, 'C': 2, 'D': 0},
    }


def test_aggregate_all_methods():
    tally = system.aggregate([NORTH, SOUTH])
    assert list(tally) == list(system.METHODS)
    for result in tally.values():
        assert sum(result.values()) == 15


def test_aggregate_disputed():
    config = district({'A': 500, 'B': 500}, 1, tieBreak='disputed')
    tally = system.aggregate([config, config], ['dhondt'])
    assert tally['dhondt'] == {'A': 0, 'B': 0, DISPUTED: 2}


def test_aggregate_configs():
    configs = [DistrictConfig.from_dict(NORTH), SOUTH]
    assert system.aggregate(configs, ['hare']) == {
        'hare': {'A': 7, 'B': 5, 'C': 2, 'D': 1}
    }


def test_aggregate_empty():
    assert system.aggregate([], ['hare', 'dhondt']) == {
        'hare': {}, 'dhondt': {}
    }


def test_aggregate_random_reproducible():
    config = district({'A': 500, 'B': 500}, 1, tieBreak='random')
    first = system.aggregate([config] * 5, ['hare'], random_state=3)
    second = system.aggregate([config] * 5, ['hare'], random_state=3)
    assert first == second
    assert sum(first['hare'].values()) == 5
