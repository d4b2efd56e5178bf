"""
hint_builder.py
---------------
Turn alignment records into AUGUSTUS hints.

Hint types
----------
CDSpart
    Every CDS / cds / protein_match record yields one CDSpart hint, its
    interval shrunk by ``cdspart_cutoff`` bp on both sides so that the
    hint does not pin down the exact exon boundaries.  Intervals too
    short to trim collapse to their midpoint.

intron (exonerate)
    exonerate reports introns itself; 'intron' lines are copied through
    when their length lies within [min_intron_len, max_intron_len].

intron (spaln, genomeThreader, scipio)
    Inferred from the gap between two consecutive coding segments of the
    same alignment group.  The intron score is the sum of half the score
    of each flanking segment; spaln and genomeThreader introns must
    exceed the program's score threshold, scipio introns require the two
    segments to be contiguous in the query protein.

Processing is one pass over the input in file order.  Hints are written
in the order they are produced; a CDSpart hint always precedes the
intron hint inferred from the same record.
"""

from typing import Iterable, Iterator, List, Optional, TextIO

from .alignment_parser import parse_alignment_line
from .models import (AlignmentRecord, ConversionStats, HintConfig, HintRecord,
                     TransformState)
from .programs import CDS_FEATURES


def format_score(value: float) -> str:
    """Format a computed score with up to 15 significant digits ('250', '0.85')."""
    return '%.15g' % value


def cdspart_interval(start: int, end: int, cutoff: int):
    """
    Trim ``cutoff`` bp from both ends of [start, end].

    When the trimmed interval would be empty the hint collapses to the
    midpoint of the trimmed bounds, rounded toward zero.
    """
    start += cutoff
    end   -= cutoff
    if start > end:
        start = end = int((start + end) / 2)
    return start, end


class HintTransformer:
    """
    Single-pass converter from alignment records to hint records.

    One instance holds the configuration and the transform state for one
    input file.  Feed it lines with :meth:`process_line` (or records with
    :meth:`process_record`); each call returns the hints produced by that
    line.

    Example
    -------
        transformer = HintTransformer(config)
        for line_no, line in enumerate(fh, 1):
            for hint in transformer.process_line(line, line_no):
                out.write(hint.to_line())
    """

    def __init__(self, config: HintConfig, verbose: bool = False):
        self.config  = config
        self.verbose = verbose
        self.state   = TransformState()
        self.stats   = ConversionStats()

    # ── Public API ───────────────────────────────────────────────────────────

    def process_line(self, line: str, line_no: int = 0) -> List[HintRecord]:
        self.stats.lines_read += 1
        record = parse_alignment_line(line, line_no)
        if record is None:
            if line.strip() and not line.startswith('#'):
                self.stats.malformed += 1
            return []
        return self.process_record(record)

    def process_record(self, record: AlignmentRecord) -> List[HintRecord]:
        program = self.config.program
        hints: List[HintRecord] = []

        if record.feature in program.group_features:
            self._update_group(record)

        if record.feature in CDS_FEATURES:
            if not self._has_group(record):
                return hints
            hints.append(self._cdspart_hint(record))
            if record.feature in program.intron_features:
                hints.extend(self._detect_intron(record))

        elif record.feature in program.intron_features:
            if not self._has_group(record):
                return hints
            hints.extend(self._detect_intron(record))

        elif record.feature == 'intron' and program.reports_introns:
            if not self._has_group(record):
                return hints
            hint = self._reported_intron_hint(record)
            if hint is not None:
                hints.append(hint)

        return hints

    # ── Group tracking ───────────────────────────────────────────────────────

    def _update_group(self, record: AlignmentRecord) -> None:
        info = self.config.program.extract_group(record.attributes)
        if info is None:
            self._warn(f'Line {record.line_no}: could not read the alignment '
                       f'group from {record.feature} attributes '
                       f'"{record.attributes}".')
            self.state.group = None
            return
        self.state.group = info.group_id
        if info.query_start is not None:
            self.state.query_start = info.query_start
            self.state.query_end   = info.query_end

    def _has_group(self, record: AlignmentRecord) -> bool:
        if self.state.group is not None:
            return True
        self.stats.ungrouped += 1
        self._warn(f'Line {record.line_no}: {record.feature} record on '
                   f'{record.seq_id} does not belong to any alignment group; '
                   f'skipped.')
        return False

    # ── Hint construction ────────────────────────────────────────────────────

    def _hint(self, seq_id, feature, start, end, score, strand) -> HintRecord:
        return HintRecord(
            seq_id   = seq_id,
            program  = self.config.program.source_tag,
            feature  = feature,
            start    = start,
            end      = end,
            score    = score,
            strand   = strand,
            source   = self.config.source,
            group    = self.state.group,
            priority = self.config.priority,
        )

    def _cdspart_hint(self, record: AlignmentRecord) -> HintRecord:
        start, end = cdspart_interval(record.start, record.end,
                                      self.config.cdspart_cutoff)
        self.stats.cdspart_hints += 1
        return self._hint(record.seq_id, 'CDSpart', start, end,
                          record.score, record.strand)

    def _length_ok(self, length: int) -> bool:
        return self.config.min_intron_len <= length <= self.config.max_intron_len

    def _reported_intron_hint(self, record: AlignmentRecord) -> Optional[HintRecord]:
        if not self._length_ok(record.length):
            self.stats.introns_rejected += 1
            return None
        self.stats.intron_hints += 1
        return self._hint(record.seq_id, 'intron', record.start, record.end,
                          record.score, record.strand)

    # ── Intron inference ─────────────────────────────────────────────────────

    def _open_boundary(self, record: AlignmentRecord, reversed_order: bool) -> None:
        """Record the intron boundary on the downstream side of ``record``."""
        if reversed_order:
            self.state.intron_end = record.start - 1
        else:
            self.state.intron_start = record.end + 1

    def _detect_intron(self, record: AlignmentRecord) -> List[HintRecord]:
        state   = self.state
        program = self.config.program
        hints: List[HintRecord] = []

        half_score     = record.numeric_score / 2
        intron_score   = state.prev_half_score + half_score
        reversed_order = program.minus_strand_reversed and record.strand == '-'

        if state.prev_group != state.group:
            self._open_boundary(record, reversed_order)
        else:
            if reversed_order:
                state.intron_start = record.end + 1
            else:
                state.intron_end = record.start - 1
            if state.intron_end < state.intron_start:
                state.intron_start, state.intron_end = \
                    state.intron_end, state.intron_start

            if self._intron_accepted(intron_score):
                hints.append(self._hint(
                    record.seq_id, 'intron', state.intron_start,
                    state.intron_end, format_score(intron_score),
                    record.strand))
                self.stats.intron_hints += 1
            else:
                self.stats.introns_rejected += 1

            self._open_boundary(record, reversed_order)

        state.prev_half_score = half_score
        state.prev_group      = state.group
        if state.query_end is not None:
            state.prev_query_end = state.query_end
        return hints

    def _intron_accepted(self, intron_score: float) -> bool:
        state = self.state
        if not self._length_ok(state.intron_end - state.intron_start + 1):
            return False
        threshold = self.config.effective_threshold
        if threshold is not None and not intron_score > threshold:
            return False
        if self.config.program.checks_query_contiguity:
            # an insertion in the query between the two segments means
            # the genomic gap is not a clean intron
            if (state.prev_query_end is None
                    or state.prev_query_end + 1 != state.query_start):
                return False
        return True

    def _warn(self, msg: str) -> None:
        self.stats.warnings.append(msg)
        if self.verbose:
            print(f'  [WARN] {msg}')


# ─────────────────────────────────────────────────────────────────────────────
# Stream and file converters
# ─────────────────────────────────────────────────────────────────────────────

def iter_hints(lines: Iterable[str], transformer: HintTransformer) -> Iterator[HintRecord]:
    """Yield hints for each line of ``lines`` in order."""
    for line_no, line in enumerate(lines, 1):
        for hint in transformer.process_line(line, line_no):
            yield hint


def convert_alignment(
    in_fh: TextIO,
    out_fh: TextIO,
    config: HintConfig,
    verbose: bool = False,
) -> ConversionStats:
    """
    Convert an open alignment stream to hints written to ``out_fh``.

    Returns the conversion statistics.
    """
    transformer = HintTransformer(config, verbose=verbose)
    for hint in iter_hints(in_fh, transformer):
        out_fh.write(hint.to_line())
    return transformer.stats


def convert_alignment_file(
    input_path: str,
    output_path: str,
    config: HintConfig,
    verbose: bool = False,
) -> ConversionStats:
    """
    Convert the alignment file at ``input_path`` into a hints file at
    ``output_path``.  The output file is overwritten.

    Raises OSError if either file cannot be opened.
    """
    with open(input_path, 'r', encoding='utf-8', errors='replace') as in_fh, \
            open(output_path, 'w') as out_fh:
        stats = convert_alignment(in_fh, out_fh, config, verbose=verbose)

    print(f'[hint_builder] Wrote {stats.cdspart_hints} CDSpart and '
          f'{stats.intron_hints} intron hint(s) to {output_path}')
    return stats
