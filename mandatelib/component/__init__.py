'''Pluggable functions used by the allocators.

Quota and divisor functions and the tie-break and over-allocation rules are
kept in registers keyed by name, so configurations can refer to them as
strings while custom callables can still be passed directly.
'''
