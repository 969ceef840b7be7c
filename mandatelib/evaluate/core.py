'''General seat allocation machinery: error types and evaluator interfaces.'''

import abc
import random
from typing import Union

from mandatelib.candidate import PartyList


RandomState = Union[random.Random, int, None]


class AllocationError(Exception):
    '''Base class for errors raised by the allocation core.'''
    pass


class InvalidConfiguration(AllocationError, ValueError):
    '''A district configuration violates a numeric or structural invariant.

    Raised for non-positive seat counts, empty or duplicate party lists,
    negative vote counts or a barrier outside the unit interval. The caller
    must repair the configuration before allocating it again.
    '''
    pass


class UnsupportedMethod(AllocationError, KeyError):
    '''An allocation method name is not known.'''
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ''


class ConfigurationWarning(UserWarning):
    '''A configuration option was not recognized and a default was used.'''
    pass


def construct_random(random_state: RandomState = None) -> random.Random:
    '''Return a random number generator for the given state.

    :param random_state: A generator instance (returned unchanged), an
        integer seed for a new generator, or None for a new generator seeded
        from the operating system.
    '''
    if isinstance(random_state, random.Random):
        return random_state
    else:
        return random.Random(random_state)


class Distributor(metaclass=abc.ABCMeta):
    '''Allocate seats to the candidates of a working party list.

    Distributors write seat counts into the list tally in place; the list is
    always private to one allocation run.
    '''

    @abc.abstractmethod
    def evaluate(self,
                 parties: PartyList,
                 n_seats: int,
                 random_state: RandomState = None,
                 ) -> PartyList:
        '''Allocate n_seats to the parties in the list.

        :param parties: Working list of parties that passed the barrier,
            with no seats awarded yet.
        :param n_seats: Number of seats to allocate.
        :param random_state: Random source for the random tie-break rule.
        :returns: The same working list, with its seat tally filled.
        '''
        raise NotImplementedError
