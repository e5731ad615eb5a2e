# -*- coding: utf-8 -*-


"""
Parse arguments from command line

- chiprep
"""

import argparse


def add_chiprep_args():
    """
    Arguments for ChIP-seq preprocessing, SE or PE reads
    """
    parser = argparse.ArgumentParser(
        prog='chiprep',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        usage='chiprep [options] <reads1> [<reads2>]',
        description='''ChIP-seq pipeline, does not call peaks

INPUT: Single-end or Paired-end fastq files with _R1/2 extension.
QC fastq files and align reads to hg19/GRCh37 (depends on the index provided)
with BWA, convert to filtered BAM/BED and bigWig format.
cutadapt/fastqc/bwa/samtools/bedtools/bedGraphToBigWig/bedItemOverlapCount
required, picard for Paired-end reads.''',
        epilog='''Example:
chiprep -i hg19bwa -p sampleA -t 8 -s sampleA.fastq.gz
chiprep -i hg19bwa -t 8 sampleB_R1.fastq.gz sampleB_R2.fastq.gz'''
    )
    parser.add_argument('fq', nargs='*',
        help='fastq files, read1 and read2 (Paired-end), gzipped')
    parser.add_argument('-i', '--index', default=None,
        help='BWA index PATH, default: /genome/hg19/BWAindex/hg19bwa')
    parser.add_argument('-p', '--prefix', default=None,
        help='Prefix of output, default: name of the fastq file')
    parser.add_argument('-t', '--threads', default=None, type=int,
        help='Threads, default: [1]')
    parser.add_argument('-s', '--single', action='store_true', default=None,
        help='Single-end mode (Paired-end default)')
    parser.add_argument('-a', '--aln', action='store_true', default=None,
        help='Use BWA aln algorithm (BWA mem default)')
    parser.add_argument('-c', '--config', default=None,
        help='config file for the arguments, yaml/toml/json, the command \
        line arguments have priority')
    parser.add_argument('-o', '--outdir', default=None,
        help='The directory to save results, default: current working directory')
    parser.add_argument('-g', '--genome', default=None,
        help='UCSC genome name, for chromosome size, default: hg19')
    parser.add_argument('--chrom-sizes', dest='chrom_sizes', default=None,
        help='chromosome size file, chr and size, skip downloading from UCSC')
    parser.add_argument('--picard', default=None,
        help='picard command, or path to picard.jar, default: picard')
    parser.add_argument('--keep-tmp', dest='keep_tmp', action='store_true',
        default=None,
        help='Keep the intermediate files')
    parser.add_argument('--adapter3', default=None,
        help='3-adapter, default: AGATCGGAAGAGC (TruSeq)')
    parser.add_argument('--adapter5', default=None,
        help='5-adapter, default: GCTCTTCCGATCT (TruSeq)')
    return parser
