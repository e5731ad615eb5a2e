#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""This is the main script for ChIP-seq preprocessing

chiprep [options] <reads1> [<reads2>]
"""

import sys
from chiprep.utils.argsParser import add_chiprep_args
from chiprep.chipseq.config import resolve_config
from chiprep.chipseq.chipseq import Chiprep
from chiprep.utils.utils import (log, check_tools, ToolNotFoundError,
    ToolFailedError, DownloadError)


def main(argv=None):
    parser = add_chiprep_args()
    args = parser.parse_args(argv)
    # help
    if not args.fq:
        parser.print_help()
        sys.exit(1)
    args = vars(args) # convert to dict
    try:
        config = resolve_config(**args)
    except ValueError as e:
        log.error(e)
        parser.print_help()
        sys.exit(1)
    try:
        check_tools(config.layout.required_tools(config.picard))
    except ToolNotFoundError as e:
        print(e)
        sys.exit(1)
    try:
        Chiprep(config).run()
    except ToolFailedError as e:
        log.error('{}\n{}'.format(e, e.stderr))
        parser.print_help()
        sys.exit(e.returncode if e.returncode > 0 else 1)
    except DownloadError as e:
        log.error(e)
        parser.print_help()
        sys.exit(1)
    print('Run succeed')


if __name__ == '__main__':
    main()
