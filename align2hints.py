#!/usr/bin/env python3
"""
align2hints.py
==============
Generate AUGUSTUS hints from protein-to-genome alignments produced by
spaln, exonerate, GenomeThreader (gth) or scipio.

Output format
-------------
  seqname <TAB> source <TAB> feature <TAB> start <TAB> end <TAB> score
  <TAB> strand <TAB> . <TAB> src=source;grp=target_protein;pri=priority

where feature is CDSpart or intron and source is xnt2h, spn2h, gth2h or
scipio2h depending on the alignment program.

Usage
-----
    python align2hints.py \\
        --in   align.gff3 \\
        --out  hints.gff \\
        --prg  gth|exonerate|spaln|scipio \\
        [OPTIONS]

Required arguments
------------------
  --in   FILE         Alignment file (gth gff3, spaln gff3, exonerate or
                      scipio gff).
  --out  FILE         Hints file to write (CDSpart and intron hints).
  --prg  STR          Alignment program: 'exonerate', 'spaln', 'gth' or
                      'scipio'.

Optional arguments
------------------
  --CDSpart_cutoff N  Bases cut off each end of a CDSpart hint (default 15).
  --minintronlen N    Shorter introns are discarded (default 41).
  --maxintronlen N    Longer introns are discarded (default 350000).
  --priority N        Priority of the hint group (default 4).
  --source STR        Source identifier written as src= (default 'P').
  --intron_threshold X
                      Minimum intron score for spaln (default 200) or
                      gth (default 0.7).
  --dir DIR           Directory relative --in/--out paths refer to
                      (default: current directory).
  --validate          Check the written hints file afterwards.
  --verbose           Print a warning for every skipped record.

Running the alignment programs
------------------------------
  spaln          : spaln -O0 ... > spalnfile
  exonerate      : exonerate --model protein2genome --showtargetgff T ... > exfile
  GenomeThreader : gth -genomic genome.fa -protein protein.fa -gff3out
                       -skipalignmentout ... -o gthfile
  scipio         : scipio.1.4.1.pl genome.fa prot.fa | yaml2gff.1.4.pl > scipio.gff
"""

import argparse
import os
import sys

# ── Resolve lib/ directory regardless of working directory ────────────────────
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from lib.hint_builder   import convert_alignment_file
from lib.hint_validator import run_hint_validation
from lib.models         import HintConfig
from lib.programs       import AlignmentProgram, PROGRAM_NAMES


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog        = 'align2hints.py',
        description = 'Generate AUGUSTUS hints from spaln, exonerate, '
                      'GenomeThreader or scipio alignments.',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog      = __doc__.split('Running the alignment programs')[1],
    )
    req = p.add_argument_group('Required')
    req.add_argument('--in',   required=True, metavar='FILE', dest='alignfile',
                     help='Alignment input file.')
    req.add_argument('--out',  required=True, metavar='FILE', dest='hintsfile',
                     help='Hints output file.')
    req.add_argument('--prg',  required=True, metavar='STR',
                     choices=PROGRAM_NAMES + ['genomeThreader'],
                     help="Alignment program: 'exonerate', 'spaln', 'gth' "
                          "or 'scipio'.")

    hnt = p.add_argument_group('Hints')
    hnt.add_argument('--CDSpart_cutoff', type=int, default=15, metavar='N',
                     dest='cdspart_cutoff',
                     help='Bases cut off each end of CDSpart hints (default: 15).')
    hnt.add_argument('--minintronlen',   type=int, default=41, metavar='N',
                     help='Minimum intron length (default: 41).')
    hnt.add_argument('--maxintronlen',   type=int, default=350000, metavar='N',
                     help='Maximum intron length (default: 350000).')
    hnt.add_argument('--priority',       type=int, default=4, metavar='N',
                     help='Priority of the hint group (default: 4).')
    hnt.add_argument('--source',         default='P', metavar='STR',
                     help="Source identifier (default: 'P').")
    hnt.add_argument('--intron_threshold', type=float, default=None,
                     metavar='X',
                     help='Intron score threshold for spaln (default 200) '
                          'or gth (default 0.7).')

    flg = p.add_argument_group('Flags')
    flg.add_argument('--dir',      default='', metavar='DIR',
                     help='Directory relative paths refer to '
                          '(default: current dir).')
    flg.add_argument('--validate', action='store_true',
                     help='Validate the hints file after writing it.')
    flg.add_argument('--verbose',  action='store_true')
    return p


def build_config(args) -> HintConfig:
    """
    Turn parsed arguments into a HintConfig.

    Calls sys.exit with an ERROR message on inconsistent values.
    """
    program = AlignmentProgram.from_name(args.prg)

    for flag, value in [('--CDSpart_cutoff', args.cdspart_cutoff),
                        ('--minintronlen',   args.minintronlen),
                        ('--maxintronlen',   args.maxintronlen),
                        ('--priority',       args.priority)]:
        if value < 0:
            sys.exit(f'ERROR: {flag} must not be negative.')
    if args.minintronlen > args.maxintronlen:
        sys.exit(f'ERROR: --minintronlen ({args.minintronlen}) is larger than '
                 f'--maxintronlen ({args.maxintronlen}).')
    if args.intron_threshold is not None and program.intron_threshold is None:
        sys.exit(f"ERROR: --intron_threshold has no effect for '{args.prg}'; "
                 f"only spaln and gth introns are filtered by score.")

    return HintConfig(
        program          = program,
        cdspart_cutoff   = args.cdspart_cutoff,
        min_intron_len   = args.minintronlen,
        max_intron_len   = args.maxintronlen,
        priority         = args.priority,
        source           = args.source,
        intron_threshold = args.intron_threshold,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Main logic
# ─────────────────────────────────────────────────────────────────────────────

def main(argv=None):
    parser = build_parser()
    args   = parser.parse_args(argv)

    config = build_config(args)

    base_dir   = os.path.abspath(args.dir or os.getcwd())
    align_path = os.path.join(base_dir, args.alignfile)
    hints_path = os.path.join(base_dir, args.hintsfile)

    sep = '─' * 70
    print(f'\n{sep}')
    print('align2hints  –  protein alignments → AUGUSTUS hints')
    print(sep)

    # ── Check input ───────────────────────────────────────────────────────
    print(f'\n[1/3] Alignment file ({config.program.value}): {align_path}')
    if not os.path.isfile(align_path):
        sys.exit(f'ERROR: Alignment file {align_path} does not exist. '
                 f'Please check.')
    threshold = config.effective_threshold
    print(f'      Source tag {config.program.source_tag}, '
          f'CDSpart cutoff {config.cdspart_cutoff} bp, '
          f'introns {config.min_intron_len}-{config.max_intron_len} bp'
          + (f', score > {threshold}' if threshold is not None else ''))

    # ── Convert ───────────────────────────────────────────────────────────
    print(f'\n[2/3] Writing hints to: {hints_path}')
    out_dir = os.path.dirname(hints_path)
    try:
        os.makedirs(out_dir, exist_ok=True)
        stats = convert_alignment_file(align_path, hints_path, config,
                                       verbose=args.verbose)
    except OSError as e:
        sys.exit(f'ERROR: {e}')
    print(f'      {stats.summary()}')
    if stats.ungrouped and not args.verbose:
        print(f'  [WARN] {stats.ungrouped} record(s) appeared before any '
              f'alignment group and were skipped (use --verbose for details).')

    # ── Validate ──────────────────────────────────────────────────────────
    if args.validate:
        print('\n[3/3] Validating hints file...')
        passed = run_hint_validation(hints_path,
                                     config.min_intron_len,
                                     config.max_intron_len,
                                     verbose=True)
        if not passed:
            return 1
    else:
        print('\n[3/3] Validation skipped (use --validate to enable).')

    print(f'\n{sep}')
    print('Conversion complete.')
    print(f'{sep}\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
