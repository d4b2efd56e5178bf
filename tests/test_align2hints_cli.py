#!/usr/bin/env python3
"""
test_align2hints_cli.py
-----------------------
End-to-end tests for the align2hints.py command-line tool.

Tests verify:
  1. Hints are written for each supported program
  2. Option defaults and overrides reach the converter
  3. Configuration errors stop the run before any output is written

Run:
    python -m pytest tests/test_align2hints_cli.py -v
"""

import contextlib
import io
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import align2hints


GTH_GFF3 = """\
##gff-version 3
chr1\tgth\tgene\t100\t1000\t.\t+\t.\tID=gene1
chr1\tgth\tmRNA\t100\t1000\t.\t+\t.\tID=mRNA1;Parent=gene1;Target=protG 1 200 +
chr1\tgth\texon\t100\t300\t0.95\t+\t.\tParent=mRNA1
chr1\tgth\texon\t400\t600\t0.90\t+\t.\tParent=mRNA1
chr1\tgth\tCDS\t100\t300\t.\t+\t0\tParent=mRNA1
chr1\tgth\tCDS\t400\t600\t.\t+\t2\tParent=mRNA1
"""

EXONERATE_GFF = """\
# --- START OF GFF DUMP ---
chr2\texonerate:protein2genome:local\tgene\t1000\t2000\t812\t-\t.\tgene_id 1 ; sequence protE ; gene_orientation +
chr2\texonerate:protein2genome:local\tcds\t1800\t2000\t.\t-\t.\t
chr2\texonerate:protein2genome:local\tintron\t1500\t1799\t.\t-\t.\tintron_id 1
chr2\texonerate:protein2genome:local\tcds\t1000\t1499\t.\t-\t.\t
"""


class CLITestCase(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp  = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, content):
        path = os.path.join(self.tmp, name)
        with open(path, 'w') as fh:
            fh.write(content)
        return path

    def _read(self, name):
        with open(os.path.join(self.tmp, name)) as fh:
            return fh.read().splitlines()

    def _main(self, argv):
        with contextlib.redirect_stdout(io.StringIO()), \
                contextlib.redirect_stderr(io.StringIO()):
            return align2hints.main(argv)


class TestConversion(CLITestCase):

    def test_gth(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        out_path = os.path.join(self.tmp, 'hints.gff')
        rc = self._main(['--in', in_path, '--out', out_path, '--prg', 'gth'])
        self.assertEqual(rc, 0)
        self.assertEqual(self._read('hints.gff'), [
            'chr1\tgth2h\tintron\t301\t399\t0.925\t+\t.\tsrc=P;grp=protG;pri=4',
            'chr1\tgth2h\tCDSpart\t115\t285\t.\t+\t.\tsrc=P;grp=protG;pri=4',
            'chr1\tgth2h\tCDSpart\t415\t585\t.\t+\t.\tsrc=P;grp=protG;pri=4',
        ])

    def test_exonerate_minus_strand(self):
        in_path = self._write('ex.gff', EXONERATE_GFF)
        out_path = os.path.join(self.tmp, 'hints.gff')
        rc = self._main(['--in', in_path, '--out', out_path,
                         '--prg', 'exonerate', '--CDSpart_cutoff', '10',
                         '--priority', '5', '--source', 'XNT'])
        self.assertEqual(rc, 0)
        self.assertEqual(self._read('hints.gff'), [
            'chr2\txnt2h\tCDSpart\t1810\t1990\t.\t-\t.\tsrc=XNT;grp=protE;pri=5',
            'chr2\txnt2h\tintron\t1500\t1799\t.\t-\t.\tsrc=XNT;grp=protE;pri=5',
            'chr2\txnt2h\tCDSpart\t1010\t1489\t.\t-\t.\tsrc=XNT;grp=protE;pri=5',
        ])

    def test_genomethreader_alias(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        rc = self._main(['--in', in_path, '--out', 'hints.gff',
                         '--prg', 'genomeThreader', '--dir', self.tmp])
        self.assertEqual(rc, 0)
        self.assertEqual(len(self._read('hints.gff')), 3)

    def test_relative_paths_use_dir(self):
        self._write('gth.gff3', GTH_GFF3)
        rc = self._main(['--in', 'gth.gff3', '--out', 'sub/hints.gff',
                         '--prg', 'gth', '--dir', self.tmp])
        self.assertEqual(rc, 0)
        self.assertTrue(os.path.isfile(os.path.join(self.tmp, 'sub', 'hints.gff')))

    def test_intron_threshold_override(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        out_path = os.path.join(self.tmp, 'hints.gff')
        self._main(['--in', in_path, '--out', out_path, '--prg', 'gth',
                    '--intron_threshold', '0.95'])
        features = [l.split('\t')[2] for l in self._read('hints.gff')]
        self.assertEqual(features, ['CDSpart', 'CDSpart'])

    def test_validate_flag(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        out_path = os.path.join(self.tmp, 'hints.gff')
        rc = self._main(['--in', in_path, '--out', out_path, '--prg', 'gth',
                         '--validate'])
        self.assertEqual(rc, 0)


class TestConfigurationErrors(CLITestCase):

    def test_missing_input(self):
        out_path = os.path.join(self.tmp, 'hints.gff')
        with self.assertRaises(SystemExit) as ctx:
            self._main(['--in', os.path.join(self.tmp, 'nope.gff'),
                        '--out', out_path, '--prg', 'spaln'])
        self.assertIn('does not exist', str(ctx.exception.code))
        self.assertFalse(os.path.exists(out_path))

    def test_missing_program(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        with self.assertRaises(SystemExit) as ctx:
            self._main(['--in', in_path, '--out', 'hints.gff'])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_program(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        with self.assertRaises(SystemExit) as ctx:
            self._main(['--in', in_path, '--out', 'hints.gff', '--prg', 'blat'])
        self.assertEqual(ctx.exception.code, 2)

    def test_min_larger_than_max(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        with self.assertRaises(SystemExit) as ctx:
            self._main(['--in', in_path, '--out', 'hints.gff', '--prg', 'gth',
                        '--minintronlen', '500', '--maxintronlen', '100'])
        self.assertIn('--minintronlen', str(ctx.exception.code))

    def test_negative_cutoff(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        with self.assertRaises(SystemExit) as ctx:
            self._main(['--in', in_path, '--out', 'hints.gff', '--prg', 'gth',
                        '--CDSpart_cutoff', '-1'])
        self.assertIn('--CDSpart_cutoff', str(ctx.exception.code))

    def test_threshold_for_scipio_rejected(self):
        in_path = self._write('gth.gff3', GTH_GFF3)
        with self.assertRaises(SystemExit) as ctx:
            self._main(['--in', in_path, '--out', 'hints.gff',
                        '--prg', 'scipio', '--intron_threshold', '5'])
        self.assertIn('--intron_threshold', str(ctx.exception.code))


if __name__ == '__main__':
    unittest.main(verbosity=2)
