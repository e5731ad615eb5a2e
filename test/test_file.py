import os
import pytest
from chiprep.utils.file import (file_prefix, fx_name, check_fx,
    check_fx_paired, check_path, remove_tmp_files, read_lines, file_abspath)
from conftest import write_fq


def test_file_prefix():
    assert file_prefix('/data/sampleA.fastq.gz') == 'sampleA'
    assert file_prefix('sampleA.fq') == 'sampleA'
    assert file_prefix('/data/sampleA.fq.bz2', with_path=True) == '/data/sampleA'
    assert file_prefix(None) is None


def test_fx_name():
    assert fx_name('sampleA.fastq.gz') == 'sampleA'
    assert fx_name('sampleB_R1.fastq.gz') == 'sampleB_R1'
    assert fx_name('sampleB_R1.fastq.gz', fix_pe=True) == 'sampleB'
    assert fx_name('sampleB_R2_001.fastq.gz', fix_pe=True) == 'sampleB'


def test_file_abspath(tmp_path):
    assert file_abspath(None) is None
    assert os.path.isabs(file_abspath('a.fq'))
    with pytest.raises(ValueError):
        file_abspath(1)


def test_check_fx(tmp_path, se_fq):
    assert check_fx(se_fq)
    assert read_lines(se_fq, nrows=1) == ['@r1']
    f = tmp_path / 'reads.txt'
    f.write_text('chr1\t100\n')
    assert not check_fx(str(f))
    assert not check_fx(str(tmp_path / 'missing.fastq.gz'))


def test_check_fx_paired(tmp_path, pe_fq, se_fq):
    assert check_fx_paired(*pe_fq)
    assert not check_fx_paired(pe_fq[0], pe_fq[0])
    assert not check_fx_paired(pe_fq[0], se_fq)
    other = write_fq(tmp_path / 'sampleB_R2.fq.gz', 'x9/2')
    assert not check_fx_paired(pe_fq[0], other)


def test_check_path(tmp_path):
    d = str(tmp_path / 'a' / 'b')
    assert check_path(d)
    assert check_path(d) # exists
    f = tmp_path / 'file.txt'
    f.write_text('x')
    with pytest.raises(ValueError):
        check_path(str(f))


def test_remove_tmp_files(tmp_path):
    files = []
    for i in ['a.sam', 'a.bam']:
        f = tmp_path / i
        f.write_text('x')
        files.append(str(f))
    remove_tmp_files(files, keep_tmp=True)
    assert all([os.path.exists(i) for i in files])
    remove_tmp_files(files + [None, str(tmp_path / 'missing.bam')])
    assert not any([os.path.exists(i) for i in files])
