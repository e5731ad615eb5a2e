#!/usr/bin/env python3

"""Functions for the pipeline: logging, shell commands, config files

log : shared logger
update_obj : update attributes of object by dict
Config : load/dump dict in yaml/toml/json format
run_shell_cmd : run external command, abort on non-zero exit
check_tools : make sure the executables are on PATH
get_date : the current date, in local time
"""

import os
import sys
import json
import yaml
import toml
import signal
import logging
import subprocess
from shutil import which
from datetime import datetime
from dateutil import tz


logging.basicConfig(
    format='[%(asctime)s %(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    stream=sys.stdout)
log = logging.getLogger(__name__)
log.setLevel('INFO')


class ToolNotFoundError(Exception):
    """Required executable is not on PATH"""
    pass


class ToolFailedError(Exception):
    """External command returned non-zero exit code"""
    def __init__(self, cmd, returncode, stderr=''):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super(ToolFailedError, self).__init__(
            'command failed, RC={}: {}'.format(returncode, cmd))


class DownloadError(Exception):
    """Failed to fetch file from remote"""
    pass


def get_date():
    """
    Return the current date, local-formated-string

    Example:
    >>> get_date()
    '2021-05-18 17:08:53'
    """
    return datetime.now(tz.tzlocal()).strftime('%Y-%m-%d %H:%M:%S')


def run_shell_cmd(cmd):
    """This command is from 'ENCODE-DCC/atac-seq-pipeline'
    https://github.com/ENCODE-DCC/atac-seq-pipeline/blob/master/src/encode_common.py

    Run cmd in bash (pipefail), return (stdout, stderr).
    Raise ToolFailedError if the exit code is not zero.
    """
    p = subprocess.Popen(['/bin/bash', '-o', 'pipefail'], # to catch error in pipe
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        universal_newlines=True,
        preexec_fn=os.setsid) # to make a new process with a new PGID
    pid = p.pid
    pgid = os.getpgid(pid)
    log.info('run_shell_cmd: PID={}, PGID={}, CMD={}'.format(pid, pgid, cmd))
    stdout, stderr = p.communicate(cmd)
    rc = p.returncode
    if rc:
        log.error('PID={}, PGID={}, RC={}\nSTDERR={}\nSTDOUT={}'.format(
            pid, pgid, rc, stderr.strip(), stdout.strip()))
        # kill all child processes
        try:
            os.killpg(pgid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        raise ToolFailedError(cmd, rc, stderr.strip('\n'))
    return (stdout.strip('\n'), stderr.strip('\n'))


def check_tools(tools):
    """Check the executables, in order

    Parameters
    ----------
    tools : list
        Name of the commands, eg: ['bwa', 'samtools']
    """
    for i in tools:
        if which(i) is None:
            raise ToolNotFoundError('{} not found'.format(i))
    return True


def update_obj(obj, d, force=True, remove=False):
    """Update the object, by dict
    d: dict
    force: bool, update exists attributes
    remove: bool, remove exists attributes
    """
    if remove is True:
        for k in list(obj.__dict__):
            delattr(obj, k)
    # add attributes
    if isinstance(d, dict):
        for k, v in d.items():
            if not hasattr(obj, k) or force:
                setattr(obj, k, v)
    return obj


def print_dict(d):
    d = dict(sorted(d.items(), key=lambda x:x[0]))
    for k, v in d.items():
        print('{:>20s}: {}'.format(k, v))


class Config(object):
    """Working with config, in dict/yaml/toml/json formats
    load/dump

    Example:
    1. write to file
    >>> Config().dump(d, 'out.json')
    >>> Config().dump(d, 'out.toml')

    2. load from file
    >>> d = Config().load('in.yaml')
    """
    def __init__(self, x=None, **kwargs):
        self = update_obj(self, kwargs, force=True)
        self.x = x


    def load(self, x=None):
        """Read data from x, auto-recognize the file-type
        yaml, toml, json
        """
        if x is None:
            x = self.x
        if x is None:
            x_dict = None
        elif isinstance(x, dict):
            x_dict = dict(sorted(x.items(), key=lambda i:i[0]))
        elif isinstance(x, str):
            reader = self.get_reader(x)
            if reader is None:
                raise ValueError('unknown config format: {}'.format(x))
            x_dict = reader(x)
        else:
            raise ValueError('dict, str expected, got {}'.format(
                type(x).__name__))
        return x_dict


    def dump(self, d=None, x=None):
        """Write data to file x, auto-recognize the file-type
        d dict, data
        x str, file to save data
        """
        if d is None:
            d = self.load(self.x)
        if not isinstance(d, dict):
            raise ValueError('dump(d=) dict expected, got {}'.format(
                type(d).__name__))
        writer = self.get_writer(x)
        if writer is None:
            raise ValueError('unknown config format: {}'.format(x))
        writer(d, x)
        return x


    def guess_format(self, x):
        """Guess the file format, by file extension
        - yaml
        - toml
        - json
        """
        formats = {
            'json': 'json',
            'yaml': 'yaml',
            'yml': 'yaml',
            'toml': 'toml',
        }
        if isinstance(x, str):
            x_ext = os.path.splitext(x)[1]
            x_ext = x_ext.lstrip('.').lower()
            x_format = formats.get(x_ext, None)
        else:
            x_format = None
        return x_format


    def get_reader(self, x):
        readers = {
            'json': self.from_json,
            'yaml': self.from_yaml,
            'toml': self.from_toml,
        }
        return readers.get(self.guess_format(x), None)


    def get_writer(self, x):
        writers = {
            'json': self.to_json,
            'yaml': self.to_yaml,
            'toml': self.to_toml,
        }
        return writers.get(self.guess_format(x), None)


    def from_json(self, x):
        d = {}
        with open(x, 'rt') as r:
            if os.path.getsize(x) > 0:
                d = json.load(r)
        return dict(sorted(d.items(), key=lambda i:i[0]))


    def from_yaml(self, x):
        d = {}
        with open(x, 'rt') as r:
            if os.path.getsize(x) > 0:
                d = yaml.safe_load(r) or {}
        return dict(sorted(d.items(), key=lambda i:i[0]))


    def from_toml(self, x):
        d = toml.load(x)
        return dict(sorted(d.items(), key=lambda i:i[0]))


    def to_json(self, d, x):
        with open(x, 'wt') as w:
            json.dump(d, w, indent=4, sort_keys=True)


    def to_yaml(self, d, x):
        with open(x, 'wt') as w:
            yaml.dump(d, w, default_flow_style=False)


    def to_toml(self, d, x):
        with open(x, 'wt') as w:
            toml.dump(d, w)
