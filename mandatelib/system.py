'''Named allocation methods and the public allocation entry points.

The five supported methods are registered in `METHODS` by their name.
:func:`allocate` runs one method on one district, :func:`compare` runs
several methods on one district and :func:`aggregate` sums district results
into national totals for each method.
'''

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union
from numbers import Number

import mandatelib.util
import mandatelib.component.core
import mandatelib.evaluate.proportional
from mandatelib.district import DistrictConfig
from mandatelib.evaluate.core import (
    Distributor, InvalidConfiguration, RandomState, UnsupportedMethod,
    construct_random,
)
from mandatelib.evaluate.threshold import Barrier


logger = logging.getLogger(__name__)

SeatMap = Dict[str, int]
DistrictLike = Union[DistrictConfig, Mapping]


class AllocationMethod:
    '''A named proportional allocation method.

    :param name: Human readable name of the method.
    :param family: Allocator class implementing the method family,
        :class:`LargestRemainder` for quota methods or
        :class:`HighestAverages` for divisor methods.
    :param component: Name of the quota or divisor function for the family.
    '''
    def __init__(self,
                 name: str,
                 family: Callable[..., Distributor],
                 component: str,
                 ):
        self.name = name
        self.family = family
        self.component = component

    @property
    def uses_quota(self) -> bool:
        return self.family is mandatelib.evaluate.proportional.LargestRemainder

    def evaluator(self,
                  over_alloc_rule: Optional[str] = None,
                  tie_break: Optional[str] = None,
                  ) -> Distributor:
        '''Return an allocator for the method with the given rules.

        The over-allocation rule only applies to quota methods and is ignored
        for divisor methods.
        '''
        if self.uses_quota:
            return self.family(
                self.component,
                over_alloc_rule=over_alloc_rule,
                tie_break=tie_break,
            )
        else:
            return self.family(self.component, tie_break=tie_break)

    def __repr__(self) -> str:
        return f'<AllocationMethod({self.name})>'


METHODS = {
    'hare': AllocationMethod(
        'Hare Quota',
        mandatelib.evaluate.proportional.LargestRemainder, 'hare'
    ),
    'droop': AllocationMethod(
        'Droop Quota',
        mandatelib.evaluate.proportional.LargestRemainder, 'droop'
    ),
    'imperiali': AllocationMethod(
        'Imperiali Quota',
        mandatelib.evaluate.proportional.LargestRemainder, 'imperiali'
    ),
    'dhondt': AllocationMethod(
        'D\'Hondt Divisor',
        mandatelib.evaluate.proportional.HighestAverages, 'dhondt'
    ),
    'saintelague': AllocationMethod(
        'Sainte-Laguë Divisor',
        mandatelib.evaluate.proportional.HighestAverages, 'saintelague'
    ),
}

_get_method = mandatelib.component.core.getter(
    METHODS, 'allocation method', AllocationMethod, error=UnsupportedMethod
)


def get_method(name: str) -> AllocationMethod:
    '''Return an allocation method by its (case-insensitive) name.

    :raises UnsupportedMethod: If no such method is registered.
    '''
    return _get_method(method_key(name))


def method_key(name: str) -> str:
    return name.lower() if isinstance(name, str) else name


def allocate(district: DistrictLike,
             method: Optional[str] = None,
             barrier: Optional[Number] = None,
             tie_break: Optional[str] = None,
             over_alloc_rule: Optional[str] = None,
             random_state: RandomState = None,
             ) -> SeatMap:
    '''Allocate the seats of a single district.

    :param district: District configuration, or its plain data form.
    :param method: Name of the allocation method; defaults to the method
        named in the district configuration.
    :param barrier: Overrides the district barrier.
    :param tie_break: Overrides the district tie-break rule.
    :param over_alloc_rule: Overrides the district over-allocation rule
        (quota methods only).
    :param random_state: Random generator or seed for the random tie-break
        rule.
    :returns: Seats for every party that passed the barrier, including those
        with no seats, in district order. Disputed seats appear last under
        :data:`mandatelib.candidate.DISPUTED` if there are any.
    :raises InvalidConfiguration: If the district configuration is invalid or
        no method is given.
    :raises UnsupportedMethod: If the method is not known.
    '''
    district = DistrictConfig.coerce(district)
    if any(x is not None for x in (barrier, tie_break, over_alloc_rule)):
        district = district.replace(
            barrier=barrier,
            tie_break=tie_break,
            over_alloc_rule=over_alloc_rule,
        )
    if method is None:
        method = district.method
        if method is None:
            raise InvalidConfiguration(
                f'no allocation method given for {district!r}'
            )
    evaluator = get_method(method).evaluator(
        over_alloc_rule=district.over_alloc_rule,
        tie_break=district.tie_break,
    )
    parties = Barrier(district.barrier).evaluate(district.party_votes())
    logger.info('allocating %d seats among %d parties by %s',
                district.seats, len(parties), method_key(method))
    evaluator.evaluate(parties, district.seats, random_state=random_state)
    return parties.to_seat_map()


def compare(district: DistrictLike,
            methods: Optional[Iterable[str]] = None,
            **kwargs
            ) -> Dict[str, SeatMap]:
    '''Allocate the seats of a single district by several methods.

    :param district: District configuration, or its plain data form.
    :param methods: Names of the methods to use; all registered methods by
        default.
    :param kwargs: Overrides passed to :func:`allocate`.
    :returns: Seat maps keyed by method name.
    '''
    district = DistrictConfig.coerce(district)
    return {
        method_key(method): allocate(district, method, **kwargs)
        for method in _method_names(methods)
    }


def aggregate(districts: Iterable[DistrictLike],
              methods: Optional[Iterable[str]] = None,
              random_state: RandomState = None,
              ) -> Dict[str, SeatMap]:
    '''Sum district allocations into national totals for each method.

    Every district is allocated independently with its own configured rules.
    A party missing in a district contributes no seats there; disputed seats
    from all districts are summed under a single identifier.

    :param districts: District configurations, or their plain data forms.
    :param methods: Names of the methods to use; all registered methods by
        default.
    :param random_state: Random generator or seed for the random tie-break
        rule, shared by all districts.
    :returns: National seat totals keyed by method name.
    '''
    districts = [DistrictConfig.coerce(district) for district in districts]
    rng = construct_random(random_state)
    tally = {}
    for method in _method_names(methods):
        national = {}
        for district in districts:
            mandatelib.util.add_dict_to_dict(
                national, allocate(district, method, random_state=rng)
            )
        tally[method_key(method)] = national
    return tally


def _method_names(methods: Optional[Iterable[str]]) -> List[str]:
    if methods is None:
        return list(METHODS.keys())
    methods = list(methods)
    for method in methods:
        get_method(method)
    return methods
