"""
models.py
---------
Data classes used throughout the toolkit to represent alignment records,
hint records, the conversion settings and the per-run transform state.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AlignmentRecord:
    """
    One tab-separated line of alignment program output.

    Attributes
    ----------
    seq_id : str
        Genomic sequence name (column 1).
    feature : str
        Feature type (column 3), e.g. 'CDS', 'exon', 'mRNA', 'intron'.
    start : int
        1-based genomic start, always <= end.
    end : int
        1-based genomic end, always >= start.
    score : str
        Score column exactly as written in the input ('.' if absent).
    strand : str
        '+', '-' or '.'.
    attributes : str
        Column 9 and anything after it; empty when the line has 8 columns.
    line_no : int
        1-based line number in the input file (for diagnostics).
    """
    seq_id:     str
    feature:    str
    start:      int
    end:        int
    score:      str
    strand:     str
    attributes: str = ''
    line_no:    int = 0

    @property
    def numeric_score(self) -> float:
        """Score as a number; '.' and other non-numeric values count as 0."""
        try:
            return float(self.score)
        except ValueError:
            return 0.0

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass
class GroupInfo:
    """
    Group identity extracted from an alignment record's attribute column.

    query_start / query_end are only filled for scipio, whose
    protein_match lines carry the aligned range within the query protein.
    """
    group_id:    str
    query_start: Optional[int] = None
    query_end:   Optional[int] = None


@dataclass
class HintRecord:
    """
    One line of an AUGUSTUS hints file.

    The frame column is always '.'.  The attribute column is assembled
    from source, group and priority by :meth:`to_line`.
    """
    seq_id:   str
    program:  str        # source tag, e.g. 'spn2h'
    feature:  str        # 'CDSpart' or 'intron'
    start:    int
    end:      int
    score:    str
    strand:   str
    source:   str        # src= value, e.g. 'P'
    group:    str        # grp= value (target protein)
    priority: int        # pri= value

    @property
    def attributes(self) -> str:
        return f'src={self.source};grp={self.group};pri={self.priority}'

    def to_line(self) -> str:
        return '\t'.join([
            self.seq_id, self.program, self.feature,
            str(self.start), str(self.end), self.score,
            self.strand, '.', self.attributes,
        ]) + '\n'


@dataclass(frozen=True)
class HintConfig:
    """
    Settings for one conversion run.

    ``program`` is an :class:`lib.programs.AlignmentProgram` member.
    ``intron_threshold`` overrides the program's default score threshold
    (only meaningful for spaln and gth); leave as None to use the default.
    """
    program:          'AlignmentProgram'
    cdspart_cutoff:   int = 15
    min_intron_len:   int = 41
    max_intron_len:   int = 350000
    priority:         int = 4
    source:           str = 'P'
    intron_threshold: Optional[float] = None

    @property
    def effective_threshold(self) -> Optional[float]:
        if self.intron_threshold is not None:
            return self.intron_threshold
        return self.program.intron_threshold


@dataclass
class TransformState:
    """
    Mutable state carried from one alignment record to the next.

    A fresh instance is created for every conversion run.  ``prev_group``
    is None until the first intron-detection call, so any real group id
    counts as a new group at that point.
    """
    group:            Optional[str] = None   # current group, None = unresolved
    query_start:      Optional[int] = None
    query_end:        Optional[int] = None
    prev_group:       Optional[str] = None
    prev_half_score:  float = 0.0
    prev_query_end:   Optional[int] = None
    intron_start:     int = 0
    intron_end:       int = 0


@dataclass
class ConversionStats:
    """Counters reported at the end of a conversion run."""
    lines_read:       int = 0
    malformed:        int = 0
    ungrouped:        int = 0
    cdspart_hints:    int = 0
    intron_hints:     int = 0
    introns_rejected: int = 0
    warnings:         list = field(default_factory=list)

    @property
    def hints_written(self) -> int:
        return self.cdspart_hints + self.intron_hints

    def summary(self) -> str:
        return (f'{self.lines_read} line(s) read, '
                f'{self.malformed} malformed, '
                f'{self.ungrouped} without alignment group; '
                f'{self.cdspart_hints} CDSpart and '
                f'{self.intron_hints} intron hint(s) written, '
                f'{self.introns_rejected} intron candidate(s) rejected')
