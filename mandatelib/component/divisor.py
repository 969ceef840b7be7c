'''Divisor functions used in highest-averages proportional allocation.

This provides arguments for the
:class:`mandatelib.evaluate.proportional.HighestAverages` allocator.

A divisor function takes the order number (equal to the number of seats
allocated so far) and returns the divisor by which to divide the number
of votes for the given party. The party with the largest result then gets the
next seat.

All supported divisor functions are assembled in the `DIVISORS` dictionary
keyed by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from typing import Callable
from numbers import Number

import mandatelib.component.core


DIVISORS = {}


divisor_mark, get, construct = mandatelib.component.core.register_functions(
    DIVISORS, 'divisor', Callable[[int], Number]
)


@divisor_mark
def dhondt(order: int) -> int:
    '''D'Hondt divisor, the most commonly used divisor.

    Forms a simple sequence 1, 2, 3...
    Known to slightly favor larger parties.
    '''
    return order + 1


@divisor_mark
def saintelague(order: int) -> int:
    '''Sainte-Laguë (Webster) divisor.

    Forms a sequence 1, 3, 5...
    Known to favor mid-sized parties.
    '''
    return 2 * order + 1
