'''Proportional seat allocators for a single district.

This contains the two families of allocators used in party-list elections:
largest remainder allocators driven by a quota (Hare, Droop, Imperiali)
and highest averages allocators driven by a divisor sequence (D'Hondt,
Sainte-Laguë). Both work on a working party list prepared by the barrier
and resolve ties for the last seats by a configurable tie-break rule.

All arithmetic is exact: quotas, remainders and quotients are integers or
fractions, so parties are only regarded as tied when they are tied exactly.
'''

import collections
import logging
from fractions import Fraction
from numbers import Number
from typing import Callable, Dict, List, Optional, Union

import mandatelib.util
import mandatelib.component.divisor
import mandatelib.component.overalloc
import mandatelib.component.quota
import mandatelib.component.tiebreak
from mandatelib.candidate import EligibleParty, PartyList
from mandatelib.evaluate.core import (
    Distributor, RandomState, construct_random
)


logger = logging.getLogger(__name__)


class LargestRemainder(Distributor):
    '''Distribute seats proportionally, rounding by largest remainder.

    Each party is first awarded the number of seats according to the number
    of times its votes fill the quota. If these quota seats exceed the seats
    available, the over-allocation rule corrects them. The seats left over are
    then awarded to the parties with the largest remainders of votes after
    the quotas are subtracted, one seat each. Parties with exactly equal
    remainders are treated as a group; when a group is larger than the number
    of seats left, the tie-break rule decides.

    If no votes were cast or the quota comes out as zero, no seats are
    awarded at all.

    Parties without votes take part in the remainder distribution with a
    remainder of zero. When the quota seats leave more seats for remainders
    than there are parties with a positive remainder, such a party can win
    a remainder seat.

    :param quota_function: A callable producing the quota from the total
        number of votes and number of seats. The common quota functions
        can be referenced by string name from the
        :mod:`mandatelib.component.quota` module.
    :param over_alloc_rule: A rule correcting quota seats that exceed the
        number of seats, by name from
        :mod:`mandatelib.component.overalloc` or as a callable.
    :param tie_break: A rule resolving ties for the last seats, by name from
        :mod:`mandatelib.component.tiebreak` or as a callable.
    '''
    def __init__(self,
                 quota_function: Union[str, Callable[[int, int], Number]],
                 over_alloc_rule: Union[str, Callable, None] = None,
                 tie_break: Union[str, Callable, None] = None,
                 ):
        self.quota_function = mandatelib.component.quota.construct(
            quota_function
        )
        self.over_alloc_rule = (
            mandatelib.component.overalloc.DEFAULT
            if over_alloc_rule is None else over_alloc_rule
        )
        self.tie_break = (
            mandatelib.component.tiebreak.DEFAULT
            if tie_break is None else tie_break
        )

    def evaluate(self,
                 parties: PartyList,
                 n_seats: int,
                 random_state: RandomState = None,
                 ) -> PartyList:
        '''Distribute seats proportionally, rounding by largest remainder.

        :param parties: Working list of parties that passed the barrier.
        :param n_seats: Number of seats to be filled. Under the ``increase``
            over-allocation rule, more seats may be awarded.
        :param random_state: Random source for the random tie-break rule.
        '''
        total_votes = parties.total_votes
        if total_votes == 0:
            logger.info('no votes cast, no seats awarded')
            return parties
        quota = self.quota_function(total_votes, n_seats)
        if not mandatelib.component.quota.is_valid(quota):
            logger.warning('invalid quota %s, no seats awarded', quota)
            return parties
        logger.info('quota computed at %s', quota)
        mandatelib.component.overalloc.quota_seats(parties, quota)
        if parties.allocated > n_seats:
            logger.info('%d quota seats exceed %d seats, applying %s',
                        parties.allocated, n_seats, self.over_alloc_rule)
            resolve_overalloc = (
                mandatelib.component.overalloc.construct_or_default(
                    self.over_alloc_rule
                )
            )
            n_seats, quota = resolve_overalloc(parties, n_seats, quota)
        self._distribute_remainders(
            parties, n_seats, quota, construct_random(random_state)
        )
        return parties

    def _distribute_remainders(self, parties, n_seats, quota, rng) -> None:
        n_remaining = n_seats - parties.allocated
        if n_remaining <= 0:
            return
        groups: Dict[Number, List[EligibleParty]] = collections.defaultdict(
            list
        )
        for party in parties.parties:
            remainder = (
                Fraction(party.votes) / quota
                - parties.seats[party.current_index]
            )
            groups[remainder].append(party)
        for remainder in sorted(groups, reverse=True):
            group = sorted(
                groups[remainder], key=mandatelib.util.by_votes_descending
            )
            if len(group) <= n_remaining:
                for party in group:
                    logger.debug('remainder seat to %s (%s)',
                                 party, remainder)
                    parties.award(party)
                n_remaining -= len(group)
            else:
                mandatelib.component.tiebreak.resolve(
                    group, n_remaining, parties,
                    rule=self.tie_break, rng=rng,
                )
                n_remaining = 0
            if n_remaining == 0:
                break
        if n_remaining > 0:
            logger.warning('%d seats left after all remainders', n_remaining)


class HighestAverages(Distributor):
    '''Distribute seats proportionally by ordering divided vote counts.

    Divides the vote count for each party by an increasing sequence of
    divisors and awards seats one by one to the party with the highest
    quotient, recomputing its quotient with the next divisor after each seat.

    When several parties share the highest quotient exactly and there are
    enough seats left for all of them, each of them gets a seat in the same
    pass. If there are fewer seats left than tied parties, the tie-break rule
    awards the rest and the allocation ends.

    Parties without votes never get seats.

    :param divisor_function: A callable producing the divisor from the number
        of seats awarded to the party so far. The common divisor functions
        can be referenced by string name from the
        :mod:`mandatelib.component.divisor` module.
    :param tie_break: A rule resolving ties for the last seats, by name from
        :mod:`mandatelib.component.tiebreak` or as a callable.
    '''
    def __init__(self,
                 divisor_function: Union[str, Callable[[int], Number]],
                 tie_break: Union[str, Callable, None] = None,
                 ):
        self.divisor_function = mandatelib.component.divisor.construct(
            divisor_function
        )
        self.tie_break = (
            mandatelib.component.tiebreak.DEFAULT
            if tie_break is None else tie_break
        )

    def evaluate(self,
                 parties: PartyList,
                 n_seats: int,
                 random_state: RandomState = None,
                 ) -> PartyList:
        '''Distribute seats proportionally by highest averages.

        :param parties: Working list of parties that passed the barrier.
        :param n_seats: Number of seats to be filled.
        :param random_state: Random source for the random tie-break rule.
        '''
        quotients = {}
        for party in parties.parties:
            quotient = self._quotient(party.votes, 0)
            if quotient is not None:
                quotients[party.current_index] = quotient
        competing = [
            party for party in parties.parties
            if party.current_index in quotients
        ]
        n_remaining = n_seats
        while n_remaining > 0:
            if not competing:
                if parties.total_votes > 0:
                    logger.warning('no parties left for %d remaining seats',
                                   n_remaining)
                break
            competing.sort(key=lambda party: (
                -quotients[party.current_index],
                -party.votes,
                party.original_index,
            ))
            max_quotient = quotients[competing[0].current_index]
            best = [
                party for party in competing
                if quotients[party.current_index] == max_quotient
            ]
            if len(best) > n_remaining:
                mandatelib.component.tiebreak.resolve(
                    best, n_remaining, parties,
                    rule=self.tie_break, rng=construct_random(random_state),
                )
                break
            for party in best:
                logger.debug('seat to %s at quotient %s', party, max_quotient)
                parties.award(party)
                n_remaining -= 1
                new_quotient = self._quotient(
                    party.votes, parties.seats[party.current_index]
                )
                if new_quotient is None:
                    competing.remove(party)
                else:
                    quotients[party.current_index] = new_quotient
        return parties

    def _quotient(self, n_votes: int, order: int) -> Optional[Number]:
        divisor = self.divisor_function(order)
        if divisor <= 0:
            return None
        quotient = Fraction(n_votes) / divisor
        return quotient if quotient > 0 else None
