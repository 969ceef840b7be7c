'''Over-allocation rules for quota-based allocation.

Quotas smaller than the exact proportional share of a seat (such as the
Imperiali quota, or Hare with custom quota functions) can award more seats
through whole quotas than there are seats in the district. An over-allocation
rule corrects the quota seats already written into the working list tally.

A rule takes the working party list, the number of seats and the quota, and
returns the (possibly changed) number of seats and quota to be used for the
subsequent largest remainder distribution.

All rules are assembled in the `OVERALLOC_RULES` dictionary keyed by their
name. `get()` retrieves from this dictionary by string key; `construct()`
also accepts callables and passes them through. `construct_or_default()`
degrades unknown names to ``remove-large`` with a
:class:`mandatelib.evaluate.core.ConfigurationWarning`.
'''

import logging
from fractions import Fraction
from numbers import Number
from typing import Callable, Tuple

import mandatelib.util
import mandatelib.component.core
import mandatelib.component.quota
from mandatelib.candidate import PartyList
from mandatelib.evaluate.core import ConfigurationWarning


logger = logging.getLogger(__name__)

OVERALLOC_RULES = {}

DEFAULT = 'remove-large'

MAX_QUOTA_ADJUSTMENTS = 20000
'''Number of quota scaling steps after which adjust-quota gives up.'''

COARSE_STEP = 1.01
FINE_STEP = 1.0001
COARSE_STEP_OVERSHOOT = 0.1
'''Overshoot, relative to the party count, above which the coarse step is
used to scale the quota.'''

OverAllocRule = Callable[[PartyList, int, Number], Tuple[int, Number]]

overalloc_mark, get, construct = mandatelib.component.core.register_functions(
    OVERALLOC_RULES, 'over-allocation rule', OverAllocRule
)
construct_or_default = mandatelib.component.core.fallback(
    OVERALLOC_RULES, 'over-allocation rule', OverAllocRule,
    default=DEFAULT, warning=ConfigurationWarning,
)


def quota_seats(parties: PartyList, quota: Number) -> None:
    '''Write the number of whole quotas filled by each party into the tally.'''
    parties.seats = [int(member.votes // quota) for member in parties]


@overalloc_mark('remove-large')
def remove_large(parties: PartyList,
                 n_seats: int,
                 quota: Number,
                 ) -> Tuple[int, Number]:
    '''Take the excess seats away from the parties with the most votes.

    Parties holding a seat are passed in descending order of votes, each
    losing one seat, until the excess is gone; the pass is repeated if one
    seat from each is not enough.
    '''
    _remove_seats(parties, n_seats, mandatelib.util.by_votes_descending)
    return n_seats, quota


@overalloc_mark('remove-small')
def remove_small(parties: PartyList,
                 n_seats: int,
                 quota: Number,
                 ) -> Tuple[int, Number]:
    '''Take the excess seats away from the parties with the fewest votes.'''
    _remove_seats(parties, n_seats, mandatelib.util.by_votes_ascending)
    return n_seats, quota


@overalloc_mark
def increase(parties: PartyList,
             n_seats: int,
             quota: Number,
             ) -> Tuple[int, Number]:
    '''Keep all quota seats, enlarging the number of seats to match.'''
    logger.info('increasing number of seats from %d to %d',
                n_seats, parties.allocated)
    return parties.allocated, quota


@overalloc_mark('adjust-quota')
def adjust_quota(parties: PartyList,
                 n_seats: int,
                 quota: Number,
                 ) -> Tuple[int, Number]:
    '''Raise the quota step by step until the quota seats fit.

    The quota is multiplied by a growing scale factor, coarsely while the
    overshoot is large relative to the number of parties and finely
    afterwards. If the seats do not fit after :data:`MAX_QUOTA_ADJUSTMENTS`
    steps, the excess is removed by :func:`remove_large`.
    '''
    orig_quota = quota
    scale = 1.0
    n_steps = 0
    while parties.allocated > n_seats and n_steps < MAX_QUOTA_ADJUSTMENTS:
        overshoot = parties.allocated - n_seats
        if overshoot > len(parties) * COARSE_STEP_OVERSHOOT:
            scale *= COARSE_STEP
        else:
            scale *= FINE_STEP
        new_quota = orig_quota * Fraction(scale)
        if not mandatelib.component.quota.is_valid(new_quota):
            logger.warning('quota adjustment produced invalid quota %s',
                           new_quota)
            break
        quota = new_quota
        quota_seats(parties, quota)
        n_steps += 1
    if parties.allocated > n_seats:
        logger.warning(
            'quota adjustment failed after %d steps, removing %d seats'
            ' from largest parties', n_steps, parties.allocated - n_seats
        )
        return remove_large(parties, n_seats, quota)
    logger.info('quota adjusted from %s to %s in %d steps',
                orig_quota, quota, n_steps)
    return n_seats, quota


def _remove_seats(parties: PartyList,
                  n_seats: int,
                  order_key: Callable,
                  ) -> None:
    while parties.allocated > n_seats:
        holders = sorted(
            (member for member in parties
             if parties.seats[member.current_index] > 0),
            key=order_key
        )
        if not holders:
            break
        for member in holders:
            parties.award(member, -1)
            logger.debug('removing excess seat from %s', member)
            if parties.allocated <= n_seats:
                break
