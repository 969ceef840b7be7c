'''Allocate seats among the parties of a district.

The barrier in :mod:`threshold` selects the parties eligible for seats into
a working party list, and the allocators in :mod:`proportional` fill its
seat tally. Distribution evaluators return the list with seat counts for all
its members; seats routed to the disputed sink appear under the sink.

None of the evaluators validate the district configuration; that is done by
:class:`mandatelib.district.DistrictConfig`.
'''

from mandatelib.evaluate.core import *    # noqa
