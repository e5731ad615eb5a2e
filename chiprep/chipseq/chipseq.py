#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ChIP-seq pipeline, prepare files for peak calling

1. qc and mapping
  - fastqc
  - cutadapt
  - bwa (mem/aln)

2. alignment
  - sam to bam, sort
  - rmdup (SE), MarkDuplicates (PE)
  - filter, -F 1796 (SE), -f 2 -F 1804 (PE)
  - bedpe (PE)

3. bigWig
  - bamtobed, bedItemOverlapCount, bedGraphToBigWig

Output:

- {prefix}_filtered.bam
- {prefix}_pe.bed (PE)
- {prefix}.bw
- fastqc/
- logs/
"""

from collections import namedtuple
from chiprep.qc.fastqc import Fastqc
from chiprep.trim.cutadapt import Cutadapt
from chiprep.align.bwa import BWA
from chiprep.align.bam_filter import BamFilter
from chiprep.bam2bw.bam2bw import Bam2bw
from chiprep.utils.file import check_path
from chiprep.utils.utils import (log, update_obj, print_dict, get_date,
    run_shell_cmd, Config)


ChiprepOutput = namedtuple('ChiprepOutput', ['bam', 'pe_bed', 'bw'])


class Chiprep(object):
    """
    Run the pipeline for one sample, SE or PE

    Parameters
    ----------
    config : RunConfig
        see chiprep.chipseq.config.resolve_config()

    runner : callable
        run the command, return (stdout, stderr), default: run_shell_cmd
    """
    def __init__(self, config, **kwargs):
        self.config = config
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'runner': run_shell_cmd,
        }
        self = update_obj(self, args_init, force=False)
        self.config_yaml = self.config.log_file('_config.yaml')
        self.stat_json = self.config.log_file('_stat.json')


    def init_dirs(self):
        for d in [self.config.log_dir, self.config.fastqc_dir]:
            check_path(d)


    def save_config(self):
        d = self.config.to_dict()
        print_dict(d)
        Config().dump(d, self.config_yaml)


    def save_stat(self, start, trim, aln):
        d = {
            'name': self.config.prefix,
            'layout': self.config.layout.name,
            'algorithm': self.config.algorithm,
            'start': start,
            'end': get_date(),
            'trim': trim.stat,
            'flagstat': aln.stat,
        }
        Config().dump(d, self.stat_json)


    def run(self):
        start = get_date()
        log.info('chiprep: {} mode, {}'.format(self.config.layout.name,
            self.config.prefix))
        self.init_dirs()
        self.save_config()
        Fastqc(self.config, runner=self.runner).run()
        trim = Cutadapt(self.config, runner=self.runner).run()
        sam = BWA(self.config, fq1=trim.fq1, fq2=trim.fq2,
            runner=self.runner).run().sam
        aln = BamFilter(self.config, sam=sam, runner=self.runner).run()
        track = Bam2bw(self.config, bam=aln.bam, runner=self.runner).run()
        self.save_stat(start, trim, aln)
        return ChiprepOutput(aln.bam, aln.pe_bed, track.bw)
