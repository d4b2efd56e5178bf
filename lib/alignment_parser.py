"""
alignment_parser.py
-------------------
Parse the tab-separated GFF-like output of protein-to-genome alignment
programs into AlignmentRecord objects, and extract the alignment group
(target protein) from each program's attribute column.

Column layout (all supported programs)
--------------------------------------
  seqname  source  feature  start  end  score  strand  frame  [attributes]

Lines with fewer than 8 columns, comment lines and lines whose start/end
are not integers are not records; :func:`parse_alignment_line` returns
None for them.

Attribute formats
-----------------
  exonerate (gene line)      : gene_id 1 ; sequence Q9XYZ1 ; gene_orientation +
  spaln (CDS / cds line)     : ID=gene00001;Name=Q9XYZ1;Target=Q9XYZ1 1 92 +
  genomeThreader (mRNA line) : ID=mRNA1;Parent=gene1;Target=Q9XYZ1 1 92 +
  scipio (protein_match)     : ID=...;Query=Q9XYZ1 1 92;Target=...

spaln and genomeThreader share one rule: take the text after the last
'=' and keep its first whitespace-separated token.
"""

import re
from typing import Optional

from .models import AlignmentRecord, GroupInfo


# ─────────────────────────────────────────────────────────────────────────────
# Record parser
# ─────────────────────────────────────────────────────────────────────────────

MIN_COLUMNS = 8


def parse_alignment_line(line: str, line_no: int = 0) -> Optional[AlignmentRecord]:
    """
    Parse one input line.

    Returns None for lines that are not alignment records (too few
    columns, comments, non-integer coordinates).  Start and end are
    swapped when given in descending order.
    """
    line = line.rstrip('\r\n')
    if not line or line.startswith('#'):
        return None
    cols = line.split('\t')
    if len(cols) < MIN_COLUMNS:
        return None

    try:
        start = int(cols[3])
        end   = int(cols[4])
    except ValueError:
        return None
    if end < start:
        start, end = end, start

    return AlignmentRecord(
        seq_id     = cols[0],
        feature    = cols[2],
        start      = start,
        end        = end,
        score      = cols[5],
        strand     = cols[6],
        attributes = '\t'.join(cols[8:]),
        line_no    = line_no,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Group extractors
# ─────────────────────────────────────────────────────────────────────────────

_EXONERATE_SEQUENCE = re.compile(r'sequence (\S+) ;')
_SCIPIO_QUERY       = re.compile(r'Query=(\S+) (\d+) (\d+)')


def group_from_exonerate(attributes: str) -> Optional[GroupInfo]:
    """Target protein from an exonerate 'gene' line ('sequence NAME ;')."""
    m = _EXONERATE_SEQUENCE.search(attributes)
    if not m:
        return None
    return GroupInfo(m.group(1))


def group_from_target(attributes: str) -> Optional[GroupInfo]:
    """
    Target protein from a spaln CDS or genomeThreader mRNA line.

    The value after the last '=' is e.g. 'Q9XYZ1 1 92 +'; its first
    token is the protein name.  Attribute strings without any '=' have
    no recognisable target and yield None.
    """
    if '=' not in attributes:
        return None
    tokens = attributes.rsplit('=', 1)[-1].split()
    if not tokens:
        return None
    return GroupInfo(tokens[0])


def group_from_scipio(attributes: str) -> Optional[GroupInfo]:
    """Query protein and aligned query range from 'Query=NAME QSTART QEND'."""
    m = _SCIPIO_QUERY.search(attributes)
    if not m:
        return None
    return GroupInfo(
        group_id    = m.group(1),
        query_start = int(m.group(2)),
        query_end   = int(m.group(3)),
    )
