#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Read layout of the library: single-end or paired-end

The layout is chosen once, when resolving the config, and carries every
step that differs between SE and PE reads:

step          SE                       PE
-----------   ----------------------   --------------------------------
fastq         <prefix>.fastq.gz        <prefix>_R1/_R2.fastq.gz
cutadapt      -a -g                    -a -A -g -G, -o -p
bwa aln       bwa samse                bwa sampe
duplicates    samtools rmdup -s        picard MarkDuplicates (mark only)
filter        -F 1796                  -f 2 -F 1804
pair bed      -                        sort -n, bamtobed -bedpe, cut
"""

from shlex import quote
from chiprep.utils.bam import Bam, sam_flag
from chiprep.utils.file import fx_name, check_fx, check_fx_paired


REQUIRED_TOOLS = [
    'cutadapt', 'bwa', 'fastqc', 'samtools', 'bedtools',
    'bedItemOverlapCount', 'bedGraphToBigWig'
]


class ReadLayout(object):
    name = None
    is_paired = False
    n_fq = 1
    bwa_pairing = None
    include_flag = None
    exclude_flag = None


    def __repr__(self):
        return '{}()'.format(self.__class__.__name__)


    def __eq__(self, other):
        return isinstance(other, ReadLayout) and self.name == other.name


    def __hash__(self):
        return hash(self.name)


    def required_tools(self, picard='picard'):
        return list(REQUIRED_TOOLS)


    def check_fq(self, fq_list):
        """Number of fastq files, and format"""
        if not len(fq_list) == self.n_fq:
            raise ValueError('{} fastq file(s) expected for {} mode, got {}'.format(
                self.n_fq, self.name, len(fq_list)))
        for fq in fq_list:
            if not check_fx(fq):
                raise ValueError('not a fastq file: {}'.format(fq))
        return True


    def fq_list(self, fq1, fq2):
        return [i for i in [fq1, fq2] if i is not None]


class SingleEnd(ReadLayout):
    name = 'se'
    is_paired = False
    n_fq = 1
    bwa_pairing = 'samse'
    # no proper pair for SE reads, mapped only
    include_flag = None
    # unmapped/failedQC/secondary/duplicates
    exclude_flag = sam_flag('unmap', 'secondary', 'qcfail', 'dup')


    def smp_name(self, fq1):
        return fx_name(fq1, fix_pe=False)


    def clean_fq_list(self, config):
        return (config.path('_trimmed.fastq.gz'), None)


    def sai_list(self, config):
        return [config.path('.sai')]


    def cutadapt_args(self, config, fq1, fq2, clean_fq1, clean_fq2):
        return ' '.join([
            '-a {}'.format(config.adapter3),
            '-g {}'.format(config.adapter5),
            '-o {}'.format(quote(clean_fq1)),
            quote(fq1)])


    def remove_duplicates(self, stage, bam):
        """Remove duplicates, samtools rmdup -s"""
        rm_bam = stage.config.path('_rm.bam')
        stage.runner(Bam(bam).rmdup(rm_bam))
        stage.flagstat(rm_bam, 'flagstat after rmdup:')
        return (rm_bam, [rm_bam])


    def pair_bed(self, stage, bam):
        return (None, [])


class PairedEnd(ReadLayout):
    name = 'pe'
    is_paired = True
    n_fq = 2
    bwa_pairing = 'sampe'
    include_flag = sam_flag('proper_pair')
    # unmapped/failedQC/unpaired/duplicates/secondary
    exclude_flag = sam_flag('unmap', 'mate_unmap', 'secondary', 'qcfail',
        'dup')


    def required_tools(self, picard='picard'):
        picard_exe = 'java' if picard.endswith('.jar') else picard
        return list(REQUIRED_TOOLS) + [picard_exe]


    def check_fq(self, fq_list):
        super(PairedEnd, self).check_fq(fq_list)
        if not check_fx_paired(*fq_list):
            raise ValueError('fastq files not paired: {}, {}'.format(*fq_list))
        return True


    def smp_name(self, fq1):
        return fx_name(fq1, fix_pe=True)


    def clean_fq_list(self, config):
        return (config.path('_trimmed_R1.fastq.gz'),
                config.path('_trimmed_R2.fastq.gz'))


    def sai_list(self, config):
        return [config.path('_R1.sai'), config.path('_R2.sai')]


    def cutadapt_args(self, config, fq1, fq2, clean_fq1, clean_fq2):
        return ' '.join([
            '-a {0} -A {0}'.format(config.adapter3),
            '-g {0} -G {0}'.format(config.adapter5),
            '-o {} -p {}'.format(quote(clean_fq1), quote(clean_fq2)),
            quote(fq1),
            quote(fq2)])


    def remove_duplicates(self, stage, bam):
        """Mark duplicates, picard MarkDuplicates
        duplicates are removed by the filter: -F 1024
        """
        mkdup_bam = stage.config.path('_mkdup.bam')
        dup_log = stage.config.log_file('_dup.log')
        stage.runner(Bam(bam).markdup(mkdup_bam, dup_log,
            picard=stage.config.picard))
        stage.flagstat(mkdup_bam, 'flagstat after mkdup:')
        return (mkdup_bam, [mkdup_bam])


    def pair_bed(self, stage, bam):
        """BAM to BED of fragments, for macs2 -f BEDPE
        chr, start of read1, end of read2
        """
        threads = stage.config.threads
        bam2 = stage.config.path('.bam2') # sorted by name
        bedpe = stage.config.path('.bedpe')
        pe_bed = stage.config.path('_pe.bed')
        stage.runner(Bam(bam, threads).sort(bam2, by_name=True))
        stage.runner(Bam(bam2).to_bed(bedpe, bedpe=True))
        stage.runner('cut -f1,2,6 {} > {}'.format(quote(bedpe), quote(pe_bed)))
        return (pe_bed, [bam2, bedpe])


def get_layout(single=False):
    return SingleEnd() if single else PairedEnd()
