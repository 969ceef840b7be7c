"""Mandatelib - proportional allocation of seats in electoral districts.

Mandatelib computes how the seats of an electoral district are divided among
competing parties, and sums district results into national totals, under
the classical proportional representation methods: the Hare, Droop and
Imperiali quotas with largest remainders, and the D'Hondt and Sainte-Laguë
divisors.

A district is configured by its number of seats, the votes of its parties
in order, and its policies:

-   an electoral barrier excluding parties below a share of votes
    (:mod:`evaluate.threshold`),
-   a tie-break rule for seats contested by exactly tied parties, including
    routing them to a disputed seat sink (:mod:`component.tiebreak`),
-   an over-allocation rule correcting quota seats that exceed the number of
    seats (:mod:`component.overalloc`).

The :func:`allocate` function evaluates one district by one method,
:func:`compare` one district by several methods and :func:`aggregate`
produces national totals over many districts. The allocators themselves
live in the :mod:`evaluate` subpackage and the quota, divisor and rule
functions they use in the :mod:`component` subpackage.
"""

from mandatelib.candidate import DISPUTED
from mandatelib.district import DistrictConfig, PartyVotes
from mandatelib.evaluate.core import (
    AllocationError, InvalidConfiguration, UnsupportedMethod,
    ConfigurationWarning,
)
from mandatelib.system import METHODS, allocate, compare, aggregate

__all__ = [
    'DISPUTED',
    'DistrictConfig',
    'PartyVotes',
    'AllocationError',
    'InvalidConfiguration',
    'UnsupportedMethod',
    'ConfigurationWarning',
    'METHODS',
    'allocate',
    'compare',
    'aggregate',
]
