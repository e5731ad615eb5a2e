#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Resolve the arguments for the pipeline

priority: command line > config file > default values

RunConfig is immutable, created once and shared by all stages.
"""

import os
import pathlib
from collections import namedtuple
from chiprep.chipseq.layout import get_layout
from chiprep.utils.file import file_abspath, check_file
from chiprep.utils.utils import log, update_obj, Config


# TruSeq adapters
ADAPTER3 = 'AGATCGGAAGAGC'
ADAPTER5 = 'GCTCTTCCGATCT'
BWA_INDEX = '/genome/hg19/BWAindex/hg19bwa'

ARGS_DEFAULT = {
    'index': BWA_INDEX,
    'prefix': None,
    'threads': 1,
    'single': False,
    'aln': False,
    'adapter3': ADAPTER3,
    'adapter5': ADAPTER5,
    'outdir': None,
    'genome': 'hg19',
    'chrom_sizes': None,
    'picard': 'picard',
    'keep_tmp': False,
    'len_min': 30,
}


_RunConfig = namedtuple('RunConfig', [
    'layout', 'algorithm', 'threads', 'adapter3', 'adapter5', 'index',
    'prefix', 'fq1', 'fq2', 'outdir', 'log_dir', 'fastqc_dir', 'genome',
    'chrom_sizes', 'len_min', 'picard', 'keep_tmp'
])


class RunConfig(_RunConfig):
    """The resolved arguments of one run"""
    __slots__ = ()


    def path(self, suffix):
        """File in the working directory: {outdir}/{prefix}{suffix}"""
        return os.path.join(self.outdir, self.prefix + suffix)


    def log_file(self, suffix):
        """File in the log directory: {outdir}/logs/{prefix}{suffix}"""
        return os.path.join(self.log_dir, self.prefix + suffix)


    @property
    def fq_list(self):
        return self.layout.fq_list(self.fq1, self.fq2)


    def to_dict(self):
        d = dict(self._asdict())
        d['layout'] = self.layout.name
        return d


class ChiprepConfig(object):
    """
    Prepare the arguments for the pipeline
    require: fq (list), others are optional
    """
    def __init__(self, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args = ARGS_DEFAULT.copy()
        config_file = getattr(self, 'config', None)
        if isinstance(config_file, str):
            args.update(self.load_config(config_file))
        # explicit arguments from command line
        args.update({k:v for k,v in self.__dict__.items()
            if k in ARGS_DEFAULT and v is not None})
        self = update_obj(self, args, force=True)
        self.layout = get_layout(self.single)
        self.algorithm = 'aln' if self.aln else 'mem'
        if self.outdir is None:
            self.outdir = str(pathlib.Path.cwd())
        self.outdir = file_abspath(self.outdir)
        self.chrom_sizes = file_abspath(self.chrom_sizes)
        if self.chrom_sizes is not None and not check_file(self.chrom_sizes):
            raise ValueError('chrom_sizes not exists: {}'.format(self.chrom_sizes))
        self.init_threads()
        self.init_fq()
        self.init_prefix()
        self.log_dir = os.path.join(self.outdir, 'logs')
        self.fastqc_dir = os.path.join(self.outdir, 'fastqc')


    def load_config(self, x):
        """Options from config file, yaml/toml/json"""
        d = Config().load(x)
        out = {}
        for k, v in d.items():
            k = k.replace('-', '_')
            if k in ARGS_DEFAULT:
                out[k] = v
            else:
                log.warning('unknown option in config file, ignored: {}'.format(k))
        return out


    def init_threads(self):
        if isinstance(self.threads, bool) or not isinstance(self.threads, int):
            raise ValueError('threads, int expected, got {}'.format(self.threads))
        if self.threads < 1:
            raise ValueError('threads, positive int expected, got {}'.format(
                self.threads))


    def init_fq(self):
        fq = getattr(self, 'fq', None)
        if isinstance(fq, str):
            fq = [fq]
        if not isinstance(fq, list) or len(fq) == 0:
            raise ValueError('no fastq files given')
        fq = [file_abspath(i) for i in fq]
        self.layout.check_fq(fq)
        self.fq1 = fq[0]
        self.fq2 = fq[1] if self.layout.is_paired else None


    def init_prefix(self):
        if self.prefix is None:
            log.info('No -p <prefix> given, use file name as prefix')
            self.prefix = self.layout.smp_name(self.fq1)
        if not self.prefix or os.sep in self.prefix:
            raise ValueError('illegal prefix: {}, use -o for the output '
                'directory'.format(self.prefix))


    def to_config(self):
        return RunConfig(**{k:getattr(self, k) for k in RunConfig._fields})


def resolve_config(**kwargs):
    return ChiprepConfig(**kwargs).to_config()
