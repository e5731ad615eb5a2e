#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Quality control for fastq files, fastqc
"""

import os
from shlex import quote
from collections import namedtuple
from chiprep.utils.utils import update_obj, log, run_shell_cmd
from chiprep.utils.file import fx_name, check_path


FastqcOutput = namedtuple('FastqcOutput', ['html', 'zip'])


class Fastqc(object):
    """
    Run fastqc for fastq files, all files in one command

    Parameters
    ----------
    config : RunConfig

    fq : list
        fastq files
    """
    def __init__(self, config, **kwargs):
        self.config = config
        self = update_obj(self, kwargs, force=True)
        self.init_args()


    def init_args(self):
        args_init = {
            'fq': self.config.fq_list,
            'runner': run_shell_cmd,
        }
        self = update_obj(self, args_init, force=False)
        if isinstance(self.fq, str):
            self.fq = [self.fq]
        self.outdir = self.config.fastqc_dir


    def fastqc_output(self, fq):
        """
        the output of fastq files: html, zip
        """
        f_html = os.path.join(self.outdir, fx_name(fq) + '_fastqc.html')
        f_zip = os.path.join(self.outdir, fx_name(fq) + '_fastqc.zip')
        return (f_html, f_zip)


    def get_cmd(self):
        return ' '.join([
            'fastqc -f fastq',
            '-t {} -o {}'.format(self.config.threads, quote(self.outdir)),
            ' '.join([quote(i) for i in self.fq])])


    def run(self):
        check_path(self.outdir)
        self.runner(self.get_cmd())
        out = [self.fastqc_output(i) for i in self.fq]
        log.info('fastqc report saved in: {}'.format(self.outdir))
        return FastqcOutput([i[0] for i in out], [i[1] for i in out])
