'''District configuration: the input of a single allocation run.

A district is given as plain data by its callers (user interfaces, importers)
and validated here only for the invariants the allocation core relies on.
Party names, colors and other presentation attributes are not part of the
configuration and are ignored when reading plain data.
'''

import numbers
from numbers import Number
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import mandatelib.util
from mandatelib.candidate import DISPUTED
from mandatelib.evaluate.core import InvalidConfiguration


PLAIN_KEYS = {
    'seats': 'seats',
    'parties': 'parties',
    'barrier': 'barrier',
    'tieBreak': 'tie_break',
    'tie_break': 'tie_break',
    'overAllocRule': 'over_alloc_rule',
    'over_alloc_rule': 'over_alloc_rule',
    'method': 'method',
    'name': 'name',
}
'''Plain data keys accepted for a district, mapped to attribute names.'''


class PartyVotes:
    '''Votes received by a party in a district.

    :param party_id: Unique identifier of the party within the district.
    :param votes: Number of votes, a non-negative integer.
    '''
    def __init__(self, party_id: str, votes: int):
        self.party_id = party_id
        self.votes = votes

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PartyVotes':
        try:
            party_id = data['partyId'] if 'partyId' in data else data['party_id']
            votes = data['votes']
        except KeyError as e:
            raise InvalidConfiguration(
                f'party record {dict(data)!r} is missing {e}'
            ) from e
        return cls(party_id, votes)

    @classmethod
    def coerce(cls,
               value: Union['PartyVotes', Mapping[str, Any], Tuple[str, int]],
               ) -> 'PartyVotes':
        if isinstance(value, cls):
            return value
        elif isinstance(value, Mapping):
            return cls.from_dict(value)
        else:
            try:
                party_id, votes = value
            except (TypeError, ValueError) as e:
                raise InvalidConfiguration(
                    f'cannot interpret {value!r} as party votes'
                ) from e
            return cls(party_id, votes)

    def to_dict(self) -> Dict[str, Any]:
        return {'partyId': self.party_id, 'votes': self.votes}

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, PartyVotes)
            and (self.party_id, self.votes) == (other.party_id, other.votes)
        )

    def __repr__(self) -> str:
        return f'<PartyVotes({self.party_id},{self.votes})>'


class DistrictConfig:
    '''Configuration of seat allocation in one electoral district.

    The configuration is validated on construction; use :meth:`replace` to
    derive a modified copy, the original is never changed by the allocation
    core.

    :param seats: Total number of seats to distribute, a positive integer.
    :param parties: Parties with their votes, as :class:`PartyVotes`,
        ``{"partyId": ..., "votes": ...}`` mappings or ``(id, votes)`` pairs.
        The order determines the party index used in tie-breaking.
    :param barrier: Fraction of total votes a party must reach to get any
        seats. None or zero means no barrier.
    :param tie_break: Name of the tie-break rule (see
        :mod:`mandatelib.component.tiebreak`). Defaults to ``largestVotes``.
    :param over_alloc_rule: Name of the over-allocation rule for quota
        methods (see :mod:`mandatelib.component.overalloc`). Defaults to
        ``remove-large``.
    :param method: Default allocation method name for the district, used
        when the caller does not name one.
    :param name: Name of the district, not used in the allocation.
    :raises InvalidConfiguration: If the seat count is not positive, the
        party list is empty or has duplicate identifiers, any vote count is
        negative or not integral, or the barrier is outside [0, 1].
    '''
    def __init__(self,
                 seats: int,
                 parties: Iterable[Union[PartyVotes, Mapping, Tuple]],
                 barrier: Optional[Number] = None,
                 tie_break: Optional[str] = None,
                 over_alloc_rule: Optional[str] = None,
                 method: Optional[str] = None,
                 name: Optional[str] = None,
                 ):
        self.seats = seats
        self.parties = [PartyVotes.coerce(party) for party in parties]
        self.barrier = barrier
        self.tie_break = tie_break
        self.over_alloc_rule = over_alloc_rule
        self.method = method
        self.name = name
        self.validate()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DistrictConfig':
        '''Create the configuration from plain data.

        Accepts the camelCase keys used by the callers (``tieBreak``,
        ``overAllocRule``) as well as snake_case ones. Unknown keys are
        ignored.
        '''
        if 'seats' not in data or 'parties' not in data:
            raise InvalidConfiguration(
                'district data must contain seats and parties'
            )
        return cls(**{
            PLAIN_KEYS[key]: value for key, value in data.items()
            if key in PLAIN_KEYS
        })

    @classmethod
    def coerce(cls, value: Union['DistrictConfig', Mapping[str, Any]]
               ) -> 'DistrictConfig':
        if isinstance(value, cls):
            return value
        elif isinstance(value, Mapping):
            return cls.from_dict(value)
        else:
            raise InvalidConfiguration(
                f'cannot interpret {value!r} as a district configuration'
            )

    def to_dict(self) -> Dict[str, Any]:
        '''Return the plain data form of the configuration.'''
        out = {
            'seats': self.seats,
            'parties': [party.to_dict() for party in self.parties],
        }
        for key, value in (
            ('barrier', self.barrier),
            ('tieBreak', self.tie_break),
            ('overAllocRule', self.over_alloc_rule),
            ('method', self.method),
            ('name', self.name),
        ):
            if value is not None:
                out[key] = value
        return out

    def replace(self, **changes) -> 'DistrictConfig':
        '''Return a copy of the configuration with some attributes changed.

        Attributes passed as None keep their current value.
        '''
        params = {
            'seats': self.seats,
            'parties': list(self.parties),
            'barrier': self.barrier,
            'tie_break': self.tie_break,
            'over_alloc_rule': self.over_alloc_rule,
            'method': self.method,
            'name': self.name,
        }
        for key, value in changes.items():
            if key not in params:
                raise TypeError(f'unknown district attribute: {key}')
            if value is not None:
                params[key] = value
        return type(self)(**params)

    def party_votes(self) -> List[Tuple[str, int]]:
        return [(party.party_id, party.votes) for party in self.parties]

    def validate(self) -> None:
        label = f'district {self.name!r}' if self.name else 'district'
        if not _is_integral(self.seats) or self.seats <= 0:
            raise InvalidConfiguration(
                f'{label}: number of seats must be a positive integer,'
                f' got {self.seats!r}'
            )
        if not self.parties:
            raise InvalidConfiguration(f'{label}: no parties given')
        seen = set()
        for party in self.parties:
            if not isinstance(party.party_id, str):
                raise InvalidConfiguration(
                    f'{label}: party identifier must be a string,'
                    f' got {party.party_id!r}'
                )
            if party.party_id in seen:
                raise InvalidConfiguration(
                    f'{label}: duplicate party {party.party_id!r}'
                )
            if party.party_id == DISPUTED:
                raise InvalidConfiguration(
                    f'{label}: party identifier {DISPUTED!r} is reserved'
                    ' for disputed seats'
                )
            seen.add(party.party_id)
            if not _is_integral(party.votes) or party.votes < 0:
                raise InvalidConfiguration(
                    f'{label}: votes for {party.party_id!r} must be'
                    f' a non-negative integer, got {party.votes!r}'
                )
        if self.barrier:
            try:
                barrier = mandatelib.util.exact(self.barrier)
            except (TypeError, ValueError) as e:
                raise InvalidConfiguration(
                    f'{label}: invalid barrier {self.barrier!r}'
                ) from e
            if not 0 <= barrier <= 1:
                raise InvalidConfiguration(
                    f'{label}: barrier must be a fraction between 0 and 1,'
                    f' got {self.barrier!r}'
                )

    def __repr__(self) -> str:
        return (
            f'<DistrictConfig({self.name or ""},{self.seats} seats,'
            f'{len(self.parties)} parties)>'
        )


def _is_integral(value: Any) -> bool:
    return (
        isinstance(value, numbers.Integral) and not isinstance(value, bool)
    )
