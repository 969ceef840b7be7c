"""A commandline tool for quick seat allocation of districts.

Reads one district or a list of districts as JSON (with the keys seats,
parties, barrier, tieBreak, overAllocRule), allocates their seats by the
selected methods and shows the national totals.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Any, Dict, List, Optional

import mandatelib.util
import mandatelib.system
from mandatelib.district import DistrictConfig
from mandatelib.evaluate.core import AllocationError, construct_random

argparser = argparse.ArgumentParser(
    prog='mandatelib',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='JSON file to load districts from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load districts from standard input',
)
argparser.add_argument(
    '-m', '--method',
    nargs='*',
    help=(
        'allocation methods to use (default: all of '
        + ', '.join(mandatelib.system.METHODS) + ')'
    ),
)
argparser.add_argument(
    '-b', '--barrier',
    type=float,
    help='override the barrier of all districts (fraction of votes)',
)
argparser.add_argument(
    '-t', '--tie-break',
    help='override the tie-break rule of all districts',
)
argparser.add_argument(
    '-o', '--over-alloc-rule',
    help='override the over-allocation rule of all districts',
)
argparser.add_argument(
    '--seed',
    type=int,
    help='random seed for the random tie-break rule',
)
argparser.add_argument(
    '-d', '--by-district',
    action='store_true',
    help='show results for each district, not only national totals',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all allocation log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any allocation log messages or other info',
)


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         method: Optional[List[str]] = None,
         barrier: Optional[float] = None,
         tie_break: Optional[str] = None,
         over_alloc_rule: Optional[str] = None,
         seed: Optional[int] = None,
         by_district: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> int:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    try:
        districts = load_districts(input_file)
        if not districts:
            warnings.warn('no districts given, terminating')
            return 0
        districts = [
            district.replace(
                barrier=barrier,
                tie_break=tie_break,
                over_alloc_rule=over_alloc_rule,
            )
            for district in districts
        ]
        methods = method if method else None
        if by_district:
            rng = construct_random(seed)
            tally = {}
            for i, district in enumerate(districts):
                results = mandatelib.system.compare(
                    district, methods, random_state=rng
                )
                show_results(district.name or f'District {i + 1}', results)
                for method_name, seat_map in results.items():
                    mandatelib.util.add_dict_to_dict(
                        tally.setdefault(method_name, {}), seat_map
                    )
        else:
            tally = mandatelib.system.aggregate(
                districts, methods, random_state=seed
            )
    except AllocationError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    show_results('National totals', tally)
    return 0


def load_districts(input_file: io.TextIOBase) -> List[DistrictConfig]:
    """Load district configurations from a JSON file.

    The file can contain a single district object, a list of them, or an
    object with a ``districts`` list.
    """
    if input_file is None:
        raise AllocationError('no district file given')
    try:
        data = json.load(input_file)
    except json.JSONDecodeError as e:
        raise AllocationError(f'invalid district file: {e}') from e
    if isinstance(data, dict) and 'districts' in data:
        data = data['districts']
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise AllocationError(f'invalid district file: {data!r}')
    return [DistrictConfig.coerce(item) for item in data]


def show_results(title: str,
                 results: Dict[str, Dict[str, Any]],
                 ) -> None:
    """Show seat maps for several methods side by side."""
    print()
    print(title)
    party_ids = []
    for seat_map in results.values():
        for party_id in seat_map:
            if party_id not in party_ids:
                party_ids.append(party_id)
    headers = [
        mandatelib.system.get_method(method).name for method in results
    ]
    left_width = max([len(str(party_id)) for party_id in party_ids] + [5])
    widths = [max(len(header), 3) for header in headers]
    print('Party'.ljust(left_width), *[
        header.rjust(width) for header, width in zip(headers, widths)
    ], sep='  ')
    for party_id in party_ids:
        print(str(party_id).ljust(left_width), *[
            str(seat_map.get(party_id, 0)).rjust(width)
            for seat_map, width in zip(results.values(), widths)
        ], sep='  ')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        sys.exit(main(**vars(args)))
