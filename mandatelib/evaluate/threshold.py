'''Electoral barrier applied before seats are allocated.

The barrier (electoral threshold) excludes small parties from the allocation
to increase stability of the resulting elected body.
'''

import logging
from fractions import Fraction
from numbers import Number
from typing import List, Sequence, Tuple, Union

import mandatelib.util
from mandatelib.candidate import EligibleParty, PartyList


logger = logging.getLogger(__name__)


class Barrier:
    '''Relative barrier excluding parties below a share of total votes.

    A party is excluded if its votes fall strictly below the given fraction
    of all votes cast for parties in the district; reaching the barrier
    exactly is enough. If no votes were cast at all, the barrier is vacuous
    and every party is kept (all of them then get no seats).

    :param barrier: The barrier as a fraction of total votes. Zero or None
        means no barrier.
    '''
    def __init__(self, barrier: Union[Number, None] = None):
        self.barrier = barrier

    def threshold(self, total_votes: int) -> Fraction:
        '''Return the minimum number of votes needed to pass.'''
        if not self.barrier:
            return Fraction(0)
        return mandatelib.util.exact(self.barrier) * total_votes

    def evaluate(self, parties: Sequence[Tuple[str, int]]) -> PartyList:
        '''Select the parties passing the barrier into a fresh working list.

        :param parties: Party identifiers and vote counts in district order.
        :returns: Working list of eligible parties, re-indexed from zero with
            their original positions preserved.
        '''
        total_votes = sum(n_votes for party_id, n_votes in parties)
        passed: List[Tuple[int, str, int]] = []
        if total_votes == 0:
            passed = [
                (i, party_id, n_votes)
                for i, (party_id, n_votes) in enumerate(parties)
            ]
        else:
            threshold = self.threshold(total_votes)
            for i, (party_id, n_votes) in enumerate(parties):
                if n_votes < threshold:
                    logger.info('%s excluded by barrier (%d < %s votes)',
                                party_id, n_votes, threshold)
                else:
                    passed.append((i, party_id, n_votes))
        return PartyList(
            EligibleParty(party_id, n_votes, orig_i, cur_i)
            for cur_i, (orig_i, party_id, n_votes) in enumerate(passed)
        )
