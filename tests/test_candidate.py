
import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from mandatelib.candidate import DISPUTED, DisputedSink, EligibleParty, PartyList


def test_from_votes():
    parties = PartyList.from_votes({'A': 10, 'B': 0})
    assert len(parties) == 2
    assert [p.party_id for p in parties] == ['A', 'B']
    assert [p.current_index for p in parties] == [0, 1]
    assert [p.original_index for p in parties] == [0, 1]
    assert parties.seats == [0, 0]
    assert parties.total_votes == 10


def test_disputed_sink_lazy():
    parties = PartyList([
        EligibleParty('A', 10, 2, 0),
        EligibleParty('B', 5, 4, 1),
    ])
    assert parties.find(DISPUTED) is None
    sink = parties.disputed()
    assert isinstance(sink, DisputedSink)
    assert sink.is_disputed
    assert sink.votes == 0
    assert sink.current_index == 2
    assert parties.disputed() is sink
    assert len(parties) == len(parties.seats) == 3
    assert parties.parties == parties.members[:2]
    assert parties.total_votes == 15


def test_seat_map():
    parties = PartyList.from_votes({'A': 10, 'B': 5, 'C': 1})
    parties.award(parties[0], 2)
    parties.award(parties[1])
    assert parties.allocated == 3
    assert parties.to_seat_map() == {'A': 2, 'B': 1, 'C': 0}
    assert list(parties.to_seat_map()) == ['A', 'B', 'C']


def test_seat_map_disputed():
    parties = PartyList.from_votes({'A': 10, 'B': 10})
    sink = parties.disputed()
    assert DISPUTED not in parties.to_seat_map()
    parties.award(sink, 2)
    parties.award(parties[0])
    seat_map = parties.to_seat_map()
    assert seat_map == {'A': 1, 'B': 0, DISPUTED: 2}
    assert list(seat_map)[-1] == DISPUTED
