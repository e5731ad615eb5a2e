import os
import json
import pytest
from chiprep.chipseq.config import resolve_config, RunConfig, ADAPTER3
from chiprep.chipseq.layout import SingleEnd, PairedEnd
from conftest import write_fq


def test_prefix_from_se_file(se_fq, outdir):
    config = resolve_config(fq=[se_fq], single=True, outdir=outdir)
    assert config.prefix == 'sampleA'
    assert config.layout == SingleEnd()
    assert config.fq2 is None
    assert config.path('_filtered.bam') == os.path.join(outdir,
        'sampleA_filtered.bam')
    assert config.log_file('_align.log') == os.path.join(outdir, 'logs',
        'sampleA_align.log')


def test_prefix_from_pe_files(pe_fq, outdir):
    config = resolve_config(fq=pe_fq, outdir=outdir)
    assert config.prefix == 'sampleB'
    assert config.layout == PairedEnd()
    assert config.fq_list == pe_fq


def test_defaults(se_fq, outdir):
    config = resolve_config(fq=[se_fq], single=True, outdir=outdir,
        threads=None, aln=None)
    assert config.threads == 1
    assert config.algorithm == 'mem'
    assert config.adapter3 == ADAPTER3
    assert config.genome == 'hg19'
    assert config.len_min == 30
    assert config.keep_tmp is False


def test_default_outdir(se_fq, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = resolve_config(fq=[se_fq], single=True)
    assert config.outdir == str(tmp_path)
    assert config.fastqc_dir == os.path.join(str(tmp_path), 'fastqc')


def test_explicit_prefix(pe_fq, outdir):
    config = resolve_config(fq=pe_fq, outdir=outdir, prefix='ip', aln=True)
    assert config.prefix == 'ip'
    assert config.algorithm == 'aln'


@pytest.mark.parametrize('prefix', ['', 'a/b'])
def test_illegal_prefix(se_fq, outdir, prefix):
    with pytest.raises(ValueError):
        resolve_config(fq=[se_fq], single=True, outdir=outdir, prefix=prefix)


@pytest.mark.parametrize('threads', [0, -2, 'a', True])
def test_bad_threads(se_fq, outdir, threads):
    with pytest.raises(ValueError):
        resolve_config(fq=[se_fq], single=True, outdir=outdir, threads=threads)


def test_read_count(se_fq, pe_fq, outdir):
    with pytest.raises(ValueError):
        resolve_config(fq=[se_fq], outdir=outdir) # PE mode
    with pytest.raises(ValueError):
        resolve_config(fq=pe_fq, single=True, outdir=outdir)
    with pytest.raises(ValueError):
        resolve_config(fq=[], single=True, outdir=outdir)


def test_unpaired_files(tmp_path, pe_fq, outdir):
    fq2 = write_fq(tmp_path / 'sampleB_R2.fq.gz', 'x9/2')
    with pytest.raises(ValueError):
        resolve_config(fq=[pe_fq[0], fq2], outdir=outdir)


def test_not_fastq(tmp_path, outdir):
    f = tmp_path / 'sampleA.txt'
    f.write_text('chr1\t100\n')
    with pytest.raises(ValueError):
        resolve_config(fq=[str(f)], single=True, outdir=outdir)


def test_config_file(tmp_path, se_fq, outdir):
    sizes = tmp_path / 'mm10.sizes'
    sizes.write_text('chr1\t195471971\n')
    f = tmp_path / 'args.yaml'
    f.write_text('threads: 4\ngenome: mm10\nchrom-sizes: {}\n'
        'unknown_key: 1\n'.format(sizes))
    config = resolve_config(config=str(f), fq=[se_fq], single=True,
        outdir=outdir, threads=8, genome=None)
    assert config.threads == 8 # command line
    assert config.genome == 'mm10' # config file
    assert config.chrom_sizes == str(sizes)
    assert not hasattr(config, 'unknown_key')


def test_config_file_json(tmp_path, pe_fq, outdir):
    f = tmp_path / 'args.json'
    f.write_text(json.dumps({'aln': True, 'picard': '/opt/picard.jar'}))
    config = resolve_config(config=str(f), fq=pe_fq, outdir=outdir)
    assert config.algorithm == 'aln'
    assert config.picard == '/opt/picard.jar'


def test_unknown_config_format(tmp_path, se_fq, outdir):
    f = tmp_path / 'args.ini'
    f.write_text('threads=4\n')
    with pytest.raises(ValueError):
        resolve_config(config=str(f), fq=[se_fq], single=True, outdir=outdir)


def test_run_config_immutable(se_config):
    assert isinstance(se_config, RunConfig)
    with pytest.raises(AttributeError):
        se_config.threads = 8
    d = se_config.to_dict()
    assert d['layout'] == 'se'
    assert d['prefix'] == 'sampleA'


def test_missing_chrom_sizes(tmp_path, se_fq, outdir):
    with pytest.raises(ValueError):
        resolve_config(fq=[se_fq], single=True, outdir=outdir,
            chrom_sizes=str(tmp_path / 'nope.sizes'))
