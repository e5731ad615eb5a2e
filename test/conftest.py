"""
Shared pytest fixtures for the chiprep test suite.

The external tools are replaced by FakeRunner, which records the commands
and creates the files each command would write.
"""

import os
import gzip
import shlex
import pytest
from chiprep.chipseq.config import resolve_config
from chiprep.utils.file import check_path, fx_name
from chiprep.utils.utils import ToolFailedError


FLAGSTAT = '''1000 + 0 in total (QC-passed reads + QC-failed reads)
0 + 0 secondary
0 + 0 supplementary
12 + 0 duplicates
990 + 0 mapped (99.00% : N/A)
1000 + 0 paired in sequencing
500 + 0 read1
500 + 0 read2
980 + 0 properly paired (98.00% : N/A)
986 + 0 with itself and mate mapped
2 + 0 singletons (0.20% : N/A)'''


CUTADAPT_LOG = '''This is cutadapt 3.4 with Python 3.8.5

=== Summary ===

Total reads processed:                   1,000
Reads with adapters:                        78 (7.8%)
Reads that were too short:                  20 (2.0%)
Reads written (passing filters):           980 (98.0%)
'''


class FakeRunner(object):
    """Record the commands, touch the output files

    fail_on : str
        raise ToolFailedError for the first command containing it
    """
    def __init__(self, fail_on=None, returncode=1):
        self.fail_on = fail_on
        self.returncode = returncode
        self.cmds = []


    def __call__(self, cmd):
        self.cmds.append(cmd)
        if self.fail_on and self.fail_on in cmd:
            raise ToolFailedError(cmd, self.returncode, 'fake failure')
        for f in self.outputs(cmd):
            if os.path.isdir(f):
                continue
            with open(f, 'at') as w:
                if cmd.startswith('cutadapt') and f.endswith('.log'):
                    w.write(CUTADAPT_LOG)
        if cmd.startswith('fastqc'):
            self.fastqc(cmd)
        if cmd.startswith('samtools flagstat'):
            return (FLAGSTAT, '')
        return ('', '')


    def outputs(self, cmd):
        tokens = shlex.split(cmd)
        out = []
        for i, t in enumerate(tokens):
            if t in ['-o', '-p', '>', '1>'] and i + 1 < len(tokens):
                out.append(tokens[i + 1])
            elif t.startswith('OUTPUT=') or t.startswith('METRICS_FILE='):
                out.append(t.split('=', 1)[1])
        if cmd.startswith('samtools rmdup') or cmd.startswith('bedGraphToBigWig'):
            out.append(tokens[-1])
        return out


    def fastqc(self, cmd):
        tokens = shlex.split(cmd)
        outdir = tokens[tokens.index('-o') + 1]
        for fq in tokens[tokens.index('-o') + 2:]:
            for ext in ['_fastqc.html', '_fastqc.zip']:
                open(os.path.join(outdir, fx_name(fq) + ext), 'wt').close()


    def find(self, x):
        """Commands containing x"""
        return [i for i in self.cmds if x in i]


def write_fq(x, name):
    with gzip.open(x, 'wt') as w:
        w.write('@{}\nACGTACGTACGTACGTACGTACGTACGTACGTACGT\n+\n'.format(name))
        w.write('IIIIIIIIIIIIIIIIIIIIIIIIIIIIIIIIIIII\n')
    return str(x)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def se_fq(tmp_path):
    return write_fq(tmp_path / 'sampleA.fastq.gz', 'r1')


@pytest.fixture
def pe_fq(tmp_path):
    fq1 = write_fq(tmp_path / 'sampleB_R1.fastq.gz', 'r1/1')
    fq2 = write_fq(tmp_path / 'sampleB_R2.fastq.gz', 'r1/2')
    return [fq1, fq2]


@pytest.fixture
def chrom_sizes(tmp_path):
    f = tmp_path / 'hg19.chrom.sizes'
    f.write_text('chr1\t249250621\nchr2\t243199373\n')
    return str(f)


@pytest.fixture
def outdir(tmp_path):
    return str(tmp_path / 'work')


@pytest.fixture
def se_config(se_fq, outdir, chrom_sizes):
    config = resolve_config(fq=[se_fq], single=True, outdir=outdir,
        index='hg19bwa', chrom_sizes=chrom_sizes)
    check_path(config.log_dir)
    return config


@pytest.fixture
def pe_config(pe_fq, outdir, chrom_sizes):
    config = resolve_config(fq=pe_fq, outdir=outdir, index='hg19bwa',
        chrom_sizes=chrom_sizes)
    check_path(config.log_dir)
    return config
