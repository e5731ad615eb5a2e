#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Post-process the alignment: SAM -> filtered BAM

1. sam to bam, sort by coordinate
2. duplicates, SE: removed; PE: marked
3. filter by flag, exclude unmapped/failedQC/secondary/dup, PE: keep proper pairs
4. PE only: fragments in BED format (chr, start, end)

flagstat is appended to logs/{prefix}_align.log after step 2 and 3
"""

from collections import namedtuple
from chiprep.utils.bam import Bam, parse_flagstat, is_sam_flag
from chiprep.utils.file import remove_tmp_files
from chiprep.utils.utils import log, update_obj, run_shell_cmd


FilterOutput = namedtuple('FilterOutput', ['bam', 'pe_bed', 'log', 'stat'])


class BamFilter(object):
    """
    Parameters
    ----------
    config : RunConfig

    sam : str
        The alignment from BWA
    """
    def __init__(self, config, **kwargs):
        self.config = config
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'sam': self.config.path('.sam'),
            'runner': run_shell_cmd,
        }
        self = update_obj(self, args_init, force=False)
        self.layout = self.config.layout
        self.threads = self.config.threads
        self.bam = self.config.path('.bam')
        self.srt_bam = self.config.path('_srt.bam')
        self.filtered_bam = self.config.path('_filtered.bam')
        self.align_log = self.config.log_file('_align.log')
        self.stat = {}


    def flagstat(self, bam, header, blank_line=False):
        """Append the flagstat of bam to align_log"""
        stdout, _ = self.runner(Bam(bam, self.threads).flagstat())
        with open(self.align_log, 'at') as w:
            if blank_line:
                w.write('\n')
            w.write(header + '\n')
            w.write(stdout + '\n')
        self.stat[header.rstrip(':')] = parse_flagstat(stdout)
        return stdout


    def sam_to_bam(self):
        self.runner(Bam(self.sam, self.threads).view(self.bam))
        self.runner(Bam(self.bam, self.threads).sort(self.srt_bam))
        return self.srt_bam


    def flag_names(self, flag):
        if not flag:
            return []
        return [i[1] for i in is_sam_flag(flag, return_codes=True)]


    def filter(self, bam):
        log.info('filter, keep: [{}], exclude: [{}]'.format(
            ', '.join(self.flag_names(self.layout.include_flag)),
            ', '.join(self.flag_names(self.layout.exclude_flag))))
        self.runner(Bam(bam, self.threads).view(self.filtered_bam,
            include=self.layout.include_flag,
            exclude=self.layout.exclude_flag))
        self.flagstat(self.filtered_bam, 'flagstat after filter:',
            blank_line=True)
        return self.filtered_bam


    def run(self):
        srt_bam = self.sam_to_bam()
        dup_bam, dup_tmp = self.layout.remove_duplicates(self, srt_bam)
        self.filter(dup_bam)
        pe_bed, bed_tmp = self.layout.pair_bed(self, self.filtered_bam)
        remove_tmp_files([self.sam, self.bam, self.srt_bam] + dup_tmp + bed_tmp,
            self.config.keep_tmp)
        log.info('filtered alignment: {}'.format(self.filtered_bam))
        return FilterOutput(self.filtered_bam, pe_bed, self.align_log, self.stat)
