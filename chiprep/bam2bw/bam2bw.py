#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Convert bam to bigWig

BAM -> BED -> bedGraph -> bigWig (bedtools, bedItemOverlapCount, bedGraphToBigWig)

chromosome size: chromInfo.txt.gz from UCSC, or local file
"""

import io
from shlex import quote
import pandas as pd
from urllib import request
from urllib.error import URLError
from collections import namedtuple
from chiprep.utils.bam import Bam
from chiprep.utils.file import check_file, remove_tmp_files
from chiprep.utils.utils import log, update_obj, run_shell_cmd, DownloadError


UCSC_CHROM_INFO = 'https://hgdownload.soe.ucsc.edu/goldenPath/{}/database/chromInfo.txt.gz'

TrackOutput = namedtuple('TrackOutput', ['bw'])


class ChromSizes(object):
    """Chromosome size of genome, two columns: chr, size

    Parameters
    ----------
    genome : str
        UCSC genome name, eg: hg19, hg38, mm10

    chrom_sizes : str
        local file, skip downloading if specified
    """
    def __init__(self, genome, chrom_sizes=None, url=None):
        self.genome = genome
        self.chrom_sizes = chrom_sizes
        self.url = url or UCSC_CHROM_INFO.format(genome)


    def read_local(self):
        if not check_file(self.chrom_sizes, show_error=True):
            raise ValueError('chrom_sizes not exists: {}'.format(self.chrom_sizes))
        return pd.read_csv(self.chrom_sizes, sep='\t', header=None,
            usecols=[0, 1], comment='#')


    def fetch(self):
        log.info('fetch chromosome size: {}'.format(self.url))
        try:
            with request.urlopen(self.url) as r:
                data = r.read()
        except (URLError, OSError) as e:
            raise DownloadError('failed downloading file: {}, {}'.format(
                self.url, e)) from e
        return pd.read_csv(io.BytesIO(data), sep='\t', header=None,
            usecols=[0, 1], compression='gzip')


    def save(self, outfile):
        df = self.read_local() if self.chrom_sizes else self.fetch()
        df.to_csv(outfile, sep='\t', header=False, index=False)
        return outfile


class Bam2bw(object):
    """
    Convert bam to bigWig, strand-agnostic, no normalization

    Parameters
    ----------
    config : RunConfig

    bam : str
        The filtered BAM file
    """
    def __init__(self, config, **kwargs):
        self.config = config
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'bam': self.config.path('_filtered.bam'),
            'runner': run_shell_cmd,
        }
        self = update_obj(self, args_init, force=False)
        self.genome = self.config.genome
        self.bed = self.config.path('_se.bed')
        self.chrom_len = self.config.path('.{}.len'.format(self.genome))
        self.bg = self.config.path('.bedGraph')
        self.bw = self.config.path('.bw')


    def bam_to_bed(self):
        self.runner(Bam(self.bam).to_bed(self.bed, split=True))


    def get_chrom_sizes(self):
        ChromSizes(self.genome, self.config.chrom_sizes).save(self.chrom_len)


    def bed_to_bg(self):
        cmd = ' '.join([
            'sort -k1,1 {} |'.format(quote(self.bed)),
            'bedItemOverlapCount {} -chromSize={} stdin |'.format(
                quote(self.genome), quote(self.chrom_len)),
            'sort -k1,1 -k2,2n > {}'.format(quote(self.bg))])
        self.runner(cmd)


    def bg_to_bw(self):
        self.runner('bedGraphToBigWig {} {} {}'.format(
            quote(self.bg), quote(self.chrom_len), quote(self.bw)))


    def run(self):
        self.bam_to_bed()
        self.get_chrom_sizes()
        self.bed_to_bg()
        self.bg_to_bw()
        remove_tmp_files([self.bed, self.bg, self.chrom_len],
            self.config.keep_tmp)
        log.info('bigWig: {}'.format(self.bw))
        return TrackOutput(self.bw)
