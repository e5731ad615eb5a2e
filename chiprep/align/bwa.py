#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Align reads to reference genome, using BWA

mem : bwa mem -M, SE/PE in one command
aln : bwa aln -k 2 -l 18, for each read file, then
      bwa samse (SE) or bwa sampe (PE)
"""

from shlex import quote
from collections import namedtuple
from chiprep.utils.file import remove_tmp_files
from chiprep.utils.utils import log, update_obj, run_shell_cmd


AlignOutput = namedtuple('AlignOutput', ['sam'])


class BWA(object):
    """
    Run bwa for: trimmed fq, 1 index

    Parameters
    ----------
    config : RunConfig

    fq1, fq2 : str
        The trimmed reads, fq2 is None for SE
    """
    def __init__(self, config, **kwargs):
        self.config = config
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'fq1': None,
            'fq2': None,
            'runner': run_shell_cmd,
        }
        self = update_obj(self, args_init, force=False)
        self.layout = self.config.layout
        if self.fq1 is None:
            self.fq1, self.fq2 = self.layout.clean_fq_list(self.config)
        self.fq_list = self.layout.fq_list(self.fq1, self.fq2)
        self.sai_list = self.layout.sai_list(self.config)
        self.sam = self.config.path('.sam')


    def get_cmd_mem(self):
        return ['bwa mem -M -t {} {} {} > {}'.format(
            self.config.threads,
            quote(self.config.index),
            ' '.join([quote(i) for i in self.fq_list]),
            quote(self.sam))]


    def get_cmd_aln(self):
        cmds = ['bwa aln -t {} -k 2 -l 18 {} {} > {}'.format(
            self.config.threads, quote(self.config.index), quote(fq), quote(sai))
            for fq, sai in zip(self.fq_list, self.sai_list)]
        cmds.append('bwa {} {} {} {} > {}'.format(
            self.layout.bwa_pairing,
            quote(self.config.index),
            ' '.join([quote(i) for i in self.sai_list]),
            ' '.join([quote(i) for i in self.fq_list]),
            quote(self.sam)))
        return cmds


    def get_cmd(self):
        if self.config.algorithm == 'aln':
            return self.get_cmd_aln()
        return self.get_cmd_mem()


    def run(self):
        log.info('bwa {}: {}'.format(self.config.algorithm, self.config.index))
        for cmd in self.get_cmd():
            self.runner(cmd)
        tmp = list(self.fq_list)
        if self.config.algorithm == 'aln':
            tmp += self.sai_list
        remove_tmp_files(tmp, self.config.keep_tmp)
        return AlignOutput(self.sam)
