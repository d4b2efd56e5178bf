#!/usr/bin/env python3
"""
validate_hints.py
=================
Standalone validation tool for AUGUSTUS hints files produced by
align2hints.py.

Usage
-----
    python validate_hints.py \\
        --hints  hints.gff \\
        [--minintronlen 41] \\
        [--maxintronlen 350000] \\
        [--verbose] \\
        [--report hints_validation.txt]

Arguments
---------
  --hints        FILE  Hints file – required.
  --minintronlen N     Warn about introns shorter than N bp.
  --maxintronlen N     Warn about introns longer than N bp.
  --report       FILE  Save validation report to this file.
  --verbose            Print detailed error messages.

Exit codes
----------
  0 – No errors found.
  1 – One or more errors found.
  2 – The hints file was not found.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from lib.hint_validator import validate_hints_file, run_hint_validation


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'validate_hints.py',
        description = 'Validate an AUGUSTUS hints file.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog      = (
            'Examples:\n'
            '  python validate_hints.py --hints hints.gff\n'
            '  python validate_hints.py --hints hints.gff --minintronlen 41 '
            '--maxintronlen 350000 --report validation.txt'
        ),
    )
    p.add_argument('--hints',        required=True, metavar='FILE',
                   help='Hints file to validate.')
    p.add_argument('--minintronlen', type=int, default=None, metavar='N',
                   help='Minimum expected intron length.')
    p.add_argument('--maxintronlen', type=int, default=None, metavar='N',
                   help='Maximum expected intron length.')
    p.add_argument('--report',       default='', metavar='FILE',
                   help='Save report to file.')
    p.add_argument('--verbose',      action='store_true',
                   help='Print detailed messages.')
    return p


def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    if not os.path.isfile(args.hints):
        print(f'ERROR: Hints file not found: {args.hints}', file=sys.stderr)
        return 2

    passed = run_hint_validation(
        hints_path     = args.hints,
        min_intron_len = args.minintronlen,
        max_intron_len = args.maxintronlen,
        verbose        = args.verbose,
    )

    if args.report:
        rpt = validate_hints_file(args.hints, args.minintronlen,
                                  args.maxintronlen)
        with open(args.report, 'w') as fh:
            fh.write(rpt.summary() + '\n')
        print(f'\nValidation report saved to: {args.report}')

    return 0 if passed else 1


if __name__ == '__main__':
    sys.exit(main())
