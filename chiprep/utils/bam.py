#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Function, processing BAM files

functions/classes:

Bam
  - view (sam2bam, filter by flag)
  - sort
  - rmdup (SE)
  - markdup (PE, picard)
  - flagstat
  - to_bed

sam_flag
is_sam_flag
parse_flagstat
"""

import re
from shlex import quote
from chiprep.utils.utils import log


# see: https://samtools.github.io/hts-specs/SAMv1.pdf
SAM_FLAGS = {
    'paired': 1,
    'proper_pair': 2,
    'unmap': 4,
    'mate_unmap': 8,
    'reverse': 16,
    'mate_reverse': 32,
    'read1': 64,
    'read2': 128,
    'secondary': 256,
    'qcfail': 512,
    'dup': 1024,
    'supplementary': 2048,
}


def sam_flag(*names):
    """Combine the flags by name

    >>> sam_flag('unmap', 'secondary', 'qcfail', 'dup')
    1796
    """
    return sum([SAM_FLAGS[i] for i in set(names)])


def is_sam_flag(x, return_codes=False):
    """For sam flags
    The flags for sam format are in binary code:

    1    0x1   template having multiple segments in sequencing
    2    0x2   each segment properly aligned according to the aligner
    4    0x4   segment unmapped
    8    0x8   next segment in the template unmapped
    16   0x10  SEQ being reverse complemented
    32   0x20  SEQ of the next segment in the template being reverse complemented
    64   0x40  the first segment in the template
    128  0x80  the last segment in the template
    256  0x100 secondary alignment
    512  0x200 not passing filters, such as platform/vendor quality controls
    1024 0x400 PCR or optical duplicate
    2048 0x800 supplementary alignment
    """
    h = []
    if isinstance(x, int) and x in range(1, 4096):
        for k, v in sorted(SAM_FLAGS.items(), key=lambda i:i[1]):
            if v & x:
                h.append((v, k))
    else:
        log.error('x not valid, expect int in [1, 4095], got: {}'.format(x))
    if return_codes:
        return h
    return len(h) > 0


def parse_flagstat(x):
    """Parse the output of samtools flagstat

    1000 + 0 in total (QC-passed reads + QC-failed reads)
    990 + 0 mapped (99.00% : N/A)
    980 + 0 properly paired (98.00% : N/A)
    12 + 0 duplicates

    return dict: {total, mapped, proper_pair, duplicates, secondary, ...}
    """
    keys = {
        'in total': 'total',
        'secondary': 'secondary',
        'supplementary': 'supplementary',
        'duplicates': 'duplicates',
        'mapped (': 'mapped',
        'paired in sequencing': 'paired',
        'properly paired': 'proper_pair',
        'singletons': 'singletons',
    }
    p = re.compile(r'^(\d+) \+ (\d+) (.*)$')
    out = {}
    for line in x.splitlines():
        m = p.match(line.strip())
        if m is None:
            continue
        for k, v in keys.items():
            if m.group(3).startswith(k) and v not in out:
                out[v] = int(m.group(1))
                break
    return out


class Bam(object):
    """Build samtools/picard/bedtools commands for BAM file

    Each method returns the command line, in str, to be run by
    run_shell_cmd()
    """
    def __init__(self, infile, threads=1):
        self.bam = infile
        self.threads = threads


    def view(self, outfile, include=None, exclude=None):
        """samtools view, output in BAM format
        include : -f
        exclude : -F
        """
        arg_f = '-f {}'.format(include) if include else None
        arg_F = '-F {}'.format(exclude) if exclude else None
        args = [
            'samtools view',
            '-@ {}'.format(self.threads),
            arg_f,
            arg_F,
            '-b -o {}'.format(quote(outfile)),
            quote(self.bam)]
        return ' '.join([i for i in args if i])


    def sort(self, outfile, by_name=False):
        """Sort bam file by position (default), or by read name"""
        arg_n = '-n ' if by_name else ''
        return 'samtools sort {}-@ {} -o {} {}'.format(
            arg_n, self.threads, quote(outfile), quote(self.bam))


    def rmdup(self, outfile):
        """Remove duplicates for SE reads: samtools rmdup -s"""
        return 'samtools rmdup -s {} {}'.format(quote(self.bam), quote(outfile))


    def markdup(self, outfile, metrics_file, picard='picard'):
        """Mark duplicates using picard, keep the duplicates in output
        picard MarkDuplicates INPUT=in.bam OUTPUT=out.bam METRICS_FILE=metrix.txt
        """
        if picard.endswith('.jar'):
            picard = 'java -jar {}'.format(quote(picard))
        return ' '.join([
            '{} MarkDuplicates'.format(picard),
            'INPUT={}'.format(quote(self.bam)),
            'OUTPUT={}'.format(quote(outfile)),
            'METRICS_FILE={}'.format(quote(metrics_file)),
            'REMOVE_DUPLICATES=false'])


    def flagstat(self):
        return 'samtools flagstat -@ {} {}'.format(self.threads, quote(self.bam))


    def to_bed(self, outfile, split=False, bedpe=False):
        """Convert BAM to BED, bedtools bamtobed
        split : split the spliced/gapped alignments, -split
        bedpe : paired-end BED, -bedpe (name sorted BAM required)
        """
        args = ['bedtools bamtobed']
        if split:
            args.append('-split')
        if bedpe:
            args.append('-bedpe')
        args.append('-i {} > {}'.format(quote(self.bam), quote(outfile)))
        return ' '.join(args)
