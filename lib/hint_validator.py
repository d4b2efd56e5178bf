"""
hint_validator.py
-----------------
Check an AUGUSTUS hints file written by this toolkit before it is handed
to AUGUSTUS.

Checks performed
----------------
Errors:
  - Every non-comment line has exactly 9 tab-separated columns
  - Feature is CDSpart or intron
  - Start and end are positive integers with start <= end
  - Frame column is '.'
  - Attribute column reads src=<source>;grp=<group>;pri=<integer>
  - Group is present (not empty and not 'None')
  - Score is numeric or '.'

Warnings:
  - Intron shorter than the minimum or longer than the maximum length
  - File contains no hints
"""

import re
from typing import List, Optional


# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

VALID_HINT_FEATURES = {'CDSpart', 'intron'}

_HINT_ATTRS = re.compile(r'^src=([^;]+);grp=([^;]*);pri=(-?\d+)$')


# ─────────────────────────────────────────────────────────────────────────────
# Helper
# ─────────────────────────────────────────────────────────────────────────────

class ValidationReport:
    def __init__(self):
        self.errors:   List[str] = []
        self.warnings: List[str] = []
        self.info:     List[str] = []

    def error(self, msg: str):
        self.errors.append(f'[ERROR]   {msg}')

    def warn(self, msg: str):
        self.warnings.append(f'[WARNING] {msg}')

    def note(self, msg: str):
        self.info.append(f'[INFO]    {msg}')

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        lines.extend(self.errors)
        lines.extend(self.warnings)
        lines.extend(self.info)
        if not lines:
            lines.append('[INFO]    All checks passed.')
        status = 'PASS' if self.passed else 'FAIL'
        header = f'=== Validation {status} | {len(self.errors)} error(s), ' \
                 f'{len(self.warnings)} warning(s) ==='
        return '\n'.join([header] + lines)


def _parse_coord(s: str) -> Optional[int]:
    try:
        return int(s)
    except ValueError:
        return None


def _is_score(s: str) -> bool:
    if s == '.':
        return True
    try:
        float(s)
    except ValueError:
        return False
    return True


# ─────────────────────────────────────────────────────────────────────────────
# Hints file validator
# ─────────────────────────────────────────────────────────────────────────────

def validate_hints_file(
    hints_path:     str,
    min_intron_len: Optional[int] = None,
    max_intron_len: Optional[int] = None,
) -> ValidationReport:
    """
    Validate a hints file line by line.

    ``min_intron_len`` / ``max_intron_len`` enable the intron length
    warnings; pass the values the file was generated with.
    """
    rpt = ValidationReport()

    try:
        with open(hints_path, 'r') as fh:
            lines = fh.readlines()
    except FileNotFoundError:
        rpt.error(f'Hints file not found: {hints_path}')
        return rpt

    counts = {feature: 0 for feature in VALID_HINT_FEATURES}
    groups = set()

    for lineno, raw in enumerate(lines, 1):
        line = raw.rstrip('\n')
        if not line.strip() or line.startswith('#'):
            continue

        cols = line.split('\t')
        if len(cols) != 9:
            rpt.error(f'Line {lineno}: expected 9 tab-separated columns, '
                      f'found {len(cols)}.')
            continue

        seq_id, _, feature, start_s, end_s, score, strand, frame, attrs = cols

        if not seq_id:
            rpt.error(f'Line {lineno}: empty sequence name.')

        if feature not in VALID_HINT_FEATURES:
            rpt.error(f'Line {lineno}: unknown hint feature "{feature}".')
        else:
            counts[feature] += 1

        start = _parse_coord(start_s)
        end   = _parse_coord(end_s)
        if start is None or end is None or start < 1 or end < 1:
            rpt.error(f'Line {lineno}: coordinates must be positive integers '
                      f'("{start_s}", "{end_s}").')
        elif start > end:
            rpt.error(f'Line {lineno}: start {start} is greater than end {end}.')
        elif feature == 'intron':
            length = end - start + 1
            if min_intron_len is not None and length < min_intron_len:
                rpt.warn(f'Line {lineno}: intron of {length} bp is shorter '
                         f'than {min_intron_len} bp.')
            if max_intron_len is not None and length > max_intron_len:
                rpt.warn(f'Line {lineno}: intron of {length} bp is longer '
                         f'than {max_intron_len} bp.')

        if not _is_score(score):
            rpt.error(f'Line {lineno}: score "{score}" is not numeric.')

        if strand not in ('+', '-', '.'):
            rpt.error(f'Line {lineno}: invalid strand "{strand}".')

        if frame != '.':
            rpt.error(f'Line {lineno}: frame column must be ".", got "{frame}".')

        m = _HINT_ATTRS.match(attrs)
        if not m:
            rpt.error(f'Line {lineno}: attribute column "{attrs}" does not '
                      f'match src=<source>;grp=<group>;pri=<priority>.')
        else:
            group = m.group(2)
            if not group or group == 'None':
                rpt.error(f'Line {lineno}: hint has no alignment group.')
            else:
                groups.add(group)

    total = sum(counts.values())
    if total == 0:
        rpt.warn('Hints file contains no hints.')
    else:
        rpt.note(f'{counts["CDSpart"]} CDSpart and {counts["intron"]} intron '
                 f'hint(s) from {len(groups)} alignment group(s).')
    return rpt


# ─────────────────────────────────────────────────────────────────────────────
# Validation runner
# ─────────────────────────────────────────────────────────────────────────────

def run_hint_validation(
    hints_path:     str,
    min_intron_len: Optional[int] = None,
    max_intron_len: Optional[int] = None,
    verbose:        bool = True,
) -> bool:
    """
    Validate ``hints_path`` and print a summary report.

    Returns True if no errors were found.
    """
    separator = '─' * 70

    print(f'\n{separator}')
    print('AUGUSTUS Hints File Validation')
    print(separator)

    rpt = validate_hints_file(hints_path, min_intron_len, max_intron_len)
    if verbose:
        print(rpt.summary())

    print(f'\n{separator}')
    if rpt.passed:
        print('OVERALL RESULT: PASS')
        print(f'  Errors: 0   Warnings: {len(rpt.warnings)}')
    else:
        print('OVERALL RESULT: FAIL')
        print(f'  Errors: {len(rpt.errors)}   Warnings: {len(rpt.warnings)}')
    print(separator)

    return rpt.passed
