'''Various utility functions for other modules of Mandatelib.

There should normally be no need to use these functions directly.
'''

from fractions import Fraction
from numbers import Number
from typing import Any, Dict, Union

from mandatelib.candidate import Candidate


def add_dict_to_dict(dict1: Dict[Any, Number],
                     dict2: Dict[Any, Number],
                     ) -> None:
    for key, addition in dict2.items():
        dict1[key] = dict1.get(key, 0) + addition


def exact(value: Union[Number, str]) -> Union[int, Fraction]:
    '''Convert a number to an exact integer or fraction.

    Floats are converted through their shortest decimal representation, so
    ``0.05`` becomes exactly 1/20 rather than the nearest binary fraction.
    '''
    if isinstance(value, (int, Fraction)):
        return value
    elif isinstance(value, float):
        return Fraction(repr(value))
    else:
        return Fraction(value)


def by_votes_descending(candidate: Candidate):
    return (-candidate.votes, candidate.original_index)


def by_votes_ascending(candidate: Candidate):
    return (candidate.votes, candidate.original_index)


def by_original_index(candidate: Candidate):
    return candidate.original_index
