"""
A collection of functions to help writing experiment scripts.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import os
import logging


def init_logging(logfile, debug=False, num_processes=1, rank=0, level=None):
    """
    Simple configuration of logging.

    With `logfile` None, messages go to stderr. When running on several MPI
    processes, each message is prefixed with the rank and each process writes
    to its own file, ``<logfile>.<rank>``.
    """
    if logfile:
        if num_processes > 1:
            logfile += '.%d' % rank
        logfile = os.path.abspath(logfile)

    # prefix log messages with mpi rank
    mpi_prefix = ""
    if num_processes > 1:
        mpi_prefix = 'Rank %d of %d: ' % (rank, num_processes)

    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    # allow user to override exact log_level
    if level:
        log_level = level

    logging.basicConfig(
        level=log_level,
        format=mpi_prefix + '%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        filename=logfile,
        filemode='w',
        force=True)
    return logging.getLogger("PlasticNet")
