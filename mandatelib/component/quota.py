'''Quota functions used in largest-remainder proportional allocation.

A quota function takes the total number of votes and the number of seats
to allocate and returns the number of votes required to reach a seat.
The unrounded quota functions return fractions to retain exact values, so
remainders computed from them can be compared for equality without any
tolerance.

All supported quota functions are assembled in the `QUOTAS` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from fractions import Fraction
from typing import Callable
from numbers import Number

import mandatelib.component.core


QUOTAS = {}


quota_mark, get, construct = mandatelib.component.core.register_functions(
    QUOTAS, 'quota', Callable[[int, int], Number]
)


@quota_mark
def hare(votes: int, seats: int) -> Fraction:
    '''Hare quota, the most basic one.

    This is the unrounded variant, giving the exact fraction. Since the quota
    is exactly the proportional share of a seat, it never over-allocates
    through the quota seats alone but leaves the most seats to remainders.
    '''
    return Fraction(votes, seats)


@quota_mark
def droop(votes: int, seats: int) -> int:
    '''Droop quota, the most widely used one.

    This is the smallest integer quota guaranteeing the number of passing
    candidates will not be higher than the number of seats.
    '''
    return int(Fraction(votes, seats + 1)) + 1


@quota_mark
def imperiali(votes: int, seats: int) -> Fraction:
    '''Imperiali quota.

    Imperiali quota can produce more quota seats than seats to be filled in
    some cases; the result then needs to be corrected by one of the
    over-allocation rules in :mod:`mandatelib.component.overalloc`.
    '''
    return Fraction(votes, seats + 2)


def is_valid(quota: Number) -> bool:
    '''Return True if the quota can be used to divide votes.'''
    try:
        return quota > 0 and quota != float('inf')
    except TypeError:
        return False
