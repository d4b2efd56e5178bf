"""
programs.py
-----------
The alignment programs whose output can be converted to hints.

Each AlignmentProgram member carries the behaviour that differs between
programs:

  source_tag        value written to column 2 of every hint
  group_features    feature type(s) whose attribute column names the group
  extract_group     attribute parser for those features
  intron_threshold  minimum (exclusive) intron score, None = no score filter
  intron_features   feature types that feed intron detection
  reports_introns   True when the program writes 'intron' lines itself
  minus_strand_reversed
                    True when records of a minus-strand alignment arrive
                    in descending genomic order (spaln), so the pending
                    intron boundaries are filled end-first

  ===========  ==========  ===============  ==========  ================
  program      tag         group feature    threshold   intron source
  ===========  ==========  ===============  ==========  ================
  exonerate    xnt2h       gene             -           intron lines
  spaln        spn2h       CDS / cds        200         CDS / cds
  gth          gth2h       mRNA             0.7         exon
  scipio       scipio2h    protein_match    -           protein_match
  ===========  ==========  ===============  ==========  ================
"""

from enum import Enum
from typing import Callable, FrozenSet, Optional

from .alignment_parser import (group_from_exonerate, group_from_target,
                               group_from_scipio)
from .models import GroupInfo


CDS_FEATURES = frozenset({'CDS', 'cds', 'protein_match'})


class AlignmentProgram(Enum):
    EXONERATE = 'exonerate'
    SPALN     = 'spaln'
    GTH       = 'gth'
    SCIPIO    = 'scipio'

    @classmethod
    def from_name(cls, name: str) -> 'AlignmentProgram':
        """
        Look up a program by its command-line name.

        'genomeThreader' is accepted as an alias for 'gth'.
        Raises ValueError for anything else.
        """
        key = _ALIASES.get(name, name)
        try:
            return cls(key)
        except ValueError:
            valid = ', '.join(f"'{p.value}'" for p in cls)
            raise ValueError(
                f"Invalid alignment program '{name}'. "
                f"Possible options are {valid}.") from None

    @property
    def source_tag(self) -> str:
        return _PROFILES[self]['source_tag']

    @property
    def group_features(self) -> FrozenSet[str]:
        return _PROFILES[self]['group_features']

    @property
    def intron_threshold(self) -> Optional[float]:
        return _PROFILES[self]['intron_threshold']

    @property
    def intron_features(self) -> FrozenSet[str]:
        return _PROFILES[self]['intron_features']

    @property
    def reports_introns(self) -> bool:
        return self is AlignmentProgram.EXONERATE

    @property
    def minus_strand_reversed(self) -> bool:
        return self is AlignmentProgram.SPALN

    @property
    def checks_query_contiguity(self) -> bool:
        return self is AlignmentProgram.SCIPIO

    def extract_group(self, attributes: str) -> Optional[GroupInfo]:
        extractor: Callable[[str], Optional[GroupInfo]] = \
            _PROFILES[self]['extract_group']
        return extractor(attributes)


_ALIASES = {'genomeThreader': 'gth'}

_PROFILES = {
    AlignmentProgram.EXONERATE: {
        'source_tag':       'xnt2h',
        'group_features':   frozenset({'gene'}),
        'extract_group':    group_from_exonerate,
        'intron_threshold': None,
        'intron_features':  frozenset(),
    },
    AlignmentProgram.SPALN: {
        'source_tag':       'spn2h',
        'group_features':   frozenset({'CDS', 'cds'}),
        'extract_group':    group_from_target,
        'intron_threshold': 200,
        'intron_features':  frozenset({'CDS', 'cds'}),
    },
    AlignmentProgram.GTH: {
        'source_tag':       'gth2h',
        'group_features':   frozenset({'mRNA'}),
        'extract_group':    group_from_target,
        'intron_threshold': 0.7,
        'intron_features':  frozenset({'exon'}),
    },
    AlignmentProgram.SCIPIO: {
        'source_tag':       'scipio2h',
        'group_features':   frozenset({'protein_match'}),
        'extract_group':    group_from_scipio,
        'intron_threshold': None,
        'intron_features':  frozenset({'protein_match'}),
    },
}


PROGRAM_NAMES = [p.value for p in AlignmentProgram]
