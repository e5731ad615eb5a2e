#!/usr/bin/env python3

"""
General functions for file manipulation

check_file : file exists, check_empty
remove_file : str
remove_tmp_files : list
file_abspath : str
file_prefix : str
file_exists : str
check_path : str
fx_name : str
check_fx : str
check_fx_paired : str
read_lines : str
str_distance : str
"""

import os
from re import sub, IGNORECASE
from xopen import xopen
import Levenshtein as lev # distance
from chiprep.utils.utils import log


# file: only for single file, str
def check_file(x, **kwargs):
    """Check if x is file and exists

    Parameters
    ----------
    x : str
        Path to a file

    show_error : bool
        Show the error messages

    check_empty : bool
        Check if the file is empty or not,  gzipped empty file, size=20
    """
    args = {
        'show_error': False,
        'check_empty': False
    }
    args.update(kwargs)
    if isinstance(x, str):
        if os.path.isfile(x): # symlink/file
            out = True
            if args['check_empty']:
                x_size = os.stat(x).st_size
                out = x_size > 20 if x.endswith('.gz') else x_size > 0
        else:
            if args['show_error']:
                log.error('file not exists: {}'.format(x))
            out = False
    else:
        if args['show_error']:
            log.error('x expect str, got {}'.format(type(x).__name__))
        out = False
    return out


def file_exists(x):
    return check_file(x)


def file_abspath(x):
    """Return the absolute path of file, None is kept"""
    if isinstance(x, str):
        out = os.path.abspath(os.path.expanduser(x))
    elif x is None:
        out = None
    else:
        raise ValueError('x expect str, got {}'.format(type(x).__name__))
    return out


def file_prefix(x, with_path=False):
    """Extract the prefix of file

    remove extensions
    .gz, .fq.gz, .fastq.bz2, ...
    """
    if isinstance(x, str):
        if x.endswith('.gz') or x.endswith('.bz2'):
            x = os.path.splitext(x)[0]
        out = os.path.splitext(x)[0]
        if not with_path:
            out = os.path.basename(out)
    else:
        out = None
    return out


def remove_file(x, show_log=True):
    """Remove file, skip missing files"""
    if check_file(x):
        os.remove(x)
        if show_log:
            log.info('{:<8s}: {}'.format('removed', x))
    return x


def remove_tmp_files(x, keep_tmp=False):
    """Remove the intermediate files

    Parameters
    ----------
    x : list
        The files to be removed

    keep_tmp : bool
        Keep the files
    """
    x = [i for i in x if isinstance(i, str)]
    if keep_tmp:
        log.info('keep temp files: {}'.format(', '.join(x)))
    else:
        for i in x:
            remove_file(i)
    return x


# path: only for single path, str
def check_path(x, create_dir=True):
    """Check if x is path, create it if not exists
    no error if the directory exists
    """
    if not isinstance(x, str):
        raise ValueError('x expect str, got {}'.format(type(x).__name__))
    if os.path.isfile(x):
        raise ValueError('not a directory: {}'.format(x))
    if not os.path.isdir(x) and create_dir:
        os.makedirs(x, exist_ok=True)
    return os.path.isdir(x)


def read_lines(x, nrows=0, skip=0, strip_white=True):
    """Read the first nrows lines of file, support gzipped file

    Parameters
    ----------
    nrows : int
        Number of lines to read, 0 for all lines

    skip : int
        Skip the first n lines
    """
    out = []
    with xopen(x, 'rt') as r:
        for i, line in enumerate(r):
            if i < skip:
                continue
            if strip_white:
                line = line.strip()
            out.append(line)
            if nrows > 0 and len(out) >= nrows:
                break
    return out


def str_distance(x, y):
    """Levenshtein distance between x and y"""
    return lev.distance(x, y)


# fastx file:
def fx_name(x, fix_pe=False):
    """The name of fastx

    Parameters
    ----------
    x : str
        Path to the fastx files

    fix_pe : bool
        Remove the suffix of Paired-end files, from '_R1' to the end
        sampleB_R1.fastq.gz -> sampleB
        sampleB_R1_001.fastq.gz -> sampleB
    """
    out = file_prefix(x)
    if isinstance(out, str) and fix_pe:
        out = sub('_R[12].*$', '', out, flags=IGNORECASE)
    return out


def check_fx(x):
    """Check if x is fastx file
    1. file exist, not empty
    2. first character: @ or >
    """
    if check_file(x, check_empty=True):
        a = read_lines(x, nrows=1)
        out = len(a) > 0 and len(a[0]) > 0 and a[0][0] in '>@'
    else:
        out = False
    return out


def check_fx_paired(fx1, fx2):
    """Check if fx1 and fx2 are paired or not
    1. file name: the same, after removing the _R1/_R2 marker
    2. file name, distance=1
    3. name of the first read

    fx1: @the-name/1
    fx2: @the-name/2
    """
    out = False
    if isinstance(fx1, str) and isinstance(fx2, str):
        if fx1 == fx2:
            log.warning('fx1 and fx2 are the same file')
        elif check_fx(fx1) and check_fx(fx2):
            n1 = os.path.basename(fx1)
            n2 = os.path.basename(fx2)
            c1 = fx_name(fx1, fix_pe=True) == fx_name(fx2, fix_pe=True)
            c2 = str_distance(n1, n2) == 1
            fn1 = read_lines(fx1, nrows=1)[0].split()[0]
            fn2 = read_lines(fx2, nrows=1)[0].split()[0]
            c3 = fn1[:-1] == fn2[:-1]
            out = all([c1, c2, c3])
    return out
