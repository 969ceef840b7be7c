'''Tie-breaking rules deciding who gets seats contested by tied parties.

A tie arises when more parties share the largest remainder (in quota
methods) or the highest quotient (in divisor methods) than there are seats
left to award. A tie-break rule receives the tied candidates, the number of
seats to award among them, the working party list and a random number
generator, and returns the candidates receiving the seats, one entry per
seat.

All rules are assembled in the `TIEBREAKS` dictionary keyed by their name.
`get()` retrieves from this dictionary by string key; `construct()` also
accepts callables and passes them through. `construct_or_default()` degrades
unknown names to the party index rule with a
:class:`mandatelib.evaluate.core.ConfigurationWarning`.
'''

import logging
import random
from typing import Callable, List

import mandatelib.util
import mandatelib.component.core
from mandatelib.candidate import Candidate, PartyList
from mandatelib.evaluate.core import ConfigurationWarning


logger = logging.getLogger(__name__)

TIEBREAKS = {}

DEFAULT = 'largestVotes'
FALLBACK = 'partyIndex'

TieBreakRule = Callable[
    [List[Candidate], int, PartyList, random.Random], List[Candidate]
]

tiebreak_mark, get, construct = mandatelib.component.core.register_functions(
    TIEBREAKS, 'tie-break rule', TieBreakRule
)
construct_or_default = mandatelib.component.core.fallback(
    TIEBREAKS, 'tie-break rule', TieBreakRule,
    default=FALLBACK, warning=ConfigurationWarning,
)


@tiebreak_mark('largestVotes')
def largest_votes(candidates: List[Candidate],
                  n_seats: int,
                  parties: PartyList,
                  rng: random.Random,
                  ) -> List[Candidate]:
    '''Award the contested seats to the tied parties with the most votes.

    Parties with equal votes are ordered by their position in the district.
    '''
    return sorted(
        candidates, key=mandatelib.util.by_votes_descending
    )[:n_seats]


@tiebreak_mark('leastVotes')
def least_votes(candidates: List[Candidate],
                n_seats: int,
                parties: PartyList,
                rng: random.Random,
                ) -> List[Candidate]:
    '''Award the contested seats to the tied parties with the fewest votes.'''
    return sorted(
        candidates, key=mandatelib.util.by_votes_ascending
    )[:n_seats]


@tiebreak_mark('partyIndex')
def party_index(candidates: List[Candidate],
                n_seats: int,
                parties: PartyList,
                rng: random.Random,
                ) -> List[Candidate]:
    '''Award the contested seats by the order of parties in the district.'''
    return sorted(
        candidates, key=mandatelib.util.by_original_index
    )[:n_seats]


@tiebreak_mark('random')
def random_order(candidates: List[Candidate],
                 n_seats: int,
                 parties: PartyList,
                 rng: random.Random,
                 ) -> List[Candidate]:
    '''Award the contested seats by lot.

    The candidates are shuffled uniformly (Fisher-Yates) using the given
    generator; pass a seeded one to make the draw reproducible.
    '''
    shuffled = list(candidates)
    rng.shuffle(shuffled)
    return shuffled[:n_seats]


@tiebreak_mark('disputed')
def disputed(candidates: List[Candidate],
             n_seats: int,
             parties: PartyList,
             rng: random.Random,
             ) -> List[Candidate]:
    '''Do not pick any winner; route all contested seats to the sink.

    The disputed sink is created in the working list on first use and
    reused by any later tie in the same run.
    '''
    sink = parties.disputed()
    logger.info('%d seats disputed between %s', n_seats, candidates)
    return [sink] * n_seats


def resolve(candidates: List[Candidate],
            n_seats: int,
            parties: PartyList,
            rule=DEFAULT,
            rng: random.Random = None,
            ) -> List[Candidate]:
    '''Resolve a tie and award the contested seats in the working list.

    :param candidates: Parties tied for the seats.
    :param n_seats: Number of seats to award among them; fewer than the
        number of candidates.
    :param parties: Working party list; the seats are awarded in its tally.
    :param rule: Tie-break rule name or callable. Unknown names fall back to
        the party index rule with a warning.
    :param rng: Random number generator for the random rule.
    :returns: The candidates that received a seat, one entry per seat.
    '''
    if n_seats <= 0 or not candidates:
        return []
    if rng is None:
        rng = random.Random()
    rule_fx = construct_or_default(rule)
    logger.info('breaking tie of %s for %d seats', candidates, n_seats)
    winners = rule_fx(candidates, n_seats, parties, rng)
    for winner in winners:
        parties.award(winner)
    return winners
