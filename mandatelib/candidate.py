'''Candidates competing for seats within a single allocation run.

The allocators do not work on the caller's party data directly. Every run
builds a fresh :class:`PartyList` of :class:`EligibleParty` objects for the
parties that passed the barrier, so nothing the allocators do can leak back
into the district configuration.

Seats that cannot be assigned without an arbitrary choice may be routed to
a :class:`DisputedSink`, a synthetic candidate appended to the working list
on first use and identified by the reserved :data:`DISPUTED` identifier.
'''

from typing import Dict, Iterable, Iterator, List, Union


DISPUTED = 'DISPUTED'
'''Party identifier under which disputed seats are reported.'''


class EligibleParty:
    '''A party that passed the barrier, with its bookkeeping for one run.

    :param party_id: Identifier of the party as given in the district.
    :param votes: Number of votes the party received.
    :param original_index: Position of the party in the district party list
        before barrier filtering. Determines the party index tie-break and
        serves as the final fallback ordering everywhere.
    :param current_index: Position in the working party list.
    '''
    is_disputed = False

    def __init__(self,
                 party_id: str,
                 votes: int,
                 original_index: int,
                 current_index: int,
                 ):
        self.party_id = party_id
        self.votes = votes
        self.original_index = original_index
        self.current_index = current_index

    def __repr__(self) -> str:
        return f'<EligibleParty({self.party_id},{self.votes})>'


class DisputedSink:
    '''A pseudo-party absorbing seats whose rightful recipient is tied.

    It has no votes and no position in the district input; its
    ``original_index`` of -1 marks it as synthetic.
    '''
    is_disputed = True
    party_id = DISPUTED
    votes = 0
    original_index = -1

    def __init__(self, current_index: int):
        self.current_index = current_index

    def __repr__(self) -> str:
        return '<DisputedSink>'


Candidate = Union[EligibleParty, DisputedSink]


class PartyList:
    '''The working list of candidates and their seat tally for one run.

    The tally is kept aligned with the candidate list at all times; appending
    the disputed sink extends both.

    :param parties: Eligible parties in working order.
    '''
    def __init__(self, parties: Iterable[EligibleParty]):
        self.members: List[Candidate] = list(parties)
        self.seats: List[int] = [0] * len(self.members)

    @classmethod
    def from_votes(cls, votes: Dict[str, int]) -> 'PartyList':
        '''Build a working list from party votes, all indices in dict order.'''
        return cls(
            EligibleParty(party_id, n_votes, i, i)
            for i, (party_id, n_votes) in enumerate(votes.items())
        )

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.members)

    def __getitem__(self, index: int) -> Candidate:
        return self.members[index]

    @property
    def parties(self) -> List[EligibleParty]:
        '''The real parties in the list, without the disputed sink.'''
        return [member for member in self.members if not member.is_disputed]

    @property
    def total_votes(self) -> int:
        return sum(member.votes for member in self.members)

    @property
    def allocated(self) -> int:
        return sum(self.seats)

    def find(self, party_id: str) -> Union[Candidate, None]:
        for member in self.members:
            if member.party_id == party_id:
                return member
        return None

    def disputed(self) -> DisputedSink:
        '''Return the disputed sink, appending it to the list if needed.'''
        sink = self.find(DISPUTED)
        if sink is None:
            sink = DisputedSink(len(self.members))
            self.members.append(sink)
            self.seats.append(0)
        return sink

    def award(self, candidate: Candidate, n_seats: int = 1) -> None:
        self.seats[candidate.current_index] += n_seats

    def to_seat_map(self) -> Dict[str, int]:
        '''Return the seat map for the run.

        Every real party appears, in working order, even with no seats.
        The disputed sink appears last, and only if it holds any seats.
        '''
        seat_map = {}
        disputed = 0
        for member, n_seats in zip(self.members, self.seats):
            if member.is_disputed:
                disputed += n_seats
            else:
                seat_map[member.party_id] = n_seats
        if disputed:
            seat_map[DISPUTED] = disputed
        return seat_map
