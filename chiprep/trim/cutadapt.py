#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Wrap cutadapt commands

TruSeq
  - 3' adapter: AGATCGGAAGAGC
  - 5' adapter: GCTCTTCCGATCT

For single-end read:
cutadapt -a ADAPTER [options] [-o output.fastq] input.fastq
For paired-end reads:
cutadapt -a ADAPT1 -A ADAPT2 [options] -o out1.fastq -p out2.fastq in1.fastq in2.fastq
"""

import re
from shlex import quote
from collections import namedtuple
from chiprep.utils.file import file_exists
from chiprep.utils.utils import log, update_obj, run_shell_cmd


TrimOutput = namedtuple('TrimOutput', ['fq1', 'fq2', 'log', 'stat'])


class Cutadapt(object):
    """
    Trim adapters from 5' and 3' ends, discard reads shorter than len_min

    Parameters
    ----------
    config : RunConfig

    fq1, fq2 : str
        The raw reads, fq2 is None for SE
    """
    def __init__(self, config, **kwargs):
        self.config = config
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'fq1': self.config.fq1,
            'fq2': self.config.fq2,
            'runner': run_shell_cmd,
        }
        self = update_obj(self, args_init, force=False)
        self.layout = self.config.layout
        self.clean_fq1, self.clean_fq2 = self.layout.clean_fq_list(self.config)
        self.log = self.config.log_file('_cutadapt.log')


    def get_cmd(self):
        return ' '.join([
            'cutadapt',
            '-m {}'.format(self.config.len_min),
            '-j {}'.format(self.config.threads),
            self.layout.cutadapt_args(self.config, self.fq1, self.fq2,
                self.clean_fq1, self.clean_fq2),
            '> {}'.format(quote(self.log))])


    def parse_log(self):
        """
        Parse the log file: _cutadapt.log

        SE:

        Total reads processed:               1,000,000
        Reads with adapters:                    78,522 (7.9%)
        Reads written (passing filters):       997,922 (99.8%)

        PE:

        Total read pairs processed:          1,000,000
          Read 1 with adapter:                  78,522 (7.9%)
          Read 2 with adapter:                  43,801 (4.4%)
        Pairs written (passing filters):       995,338 (99.5%)
        """
        p = re.compile(r'processed:\s+([\d,]+).*\n.*passing filters\):\s+([\d,]+)',
            re.DOTALL)
        n_total = 0
        n_clean = 0
        if file_exists(self.log):
            with open(self.log, 'rt') as r:
                m = p.search(r.read())
            if m:
                n_total = int(m.group(1).replace(',', ''))
                n_clean = int(m.group(2).replace(',', ''))
        n_pct = round(n_clean / n_total * 100, 2) if n_total > 0 else 0
        return {
            'name': self.config.prefix,
            'total': n_total,
            'clean': n_clean,
            'percent': n_pct,
        }


    def run(self):
        self.runner(self.get_cmd())
        stat = self.parse_log()
        log.info('cutadapt: {} of {} reads passed, {}%'.format(
            stat['clean'], stat['total'], stat['percent']))
        return TrimOutput(self.clean_fq1, self.clean_fq2, self.log, stat)
