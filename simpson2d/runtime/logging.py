"""
Logging of integration runs: progress on the console, full diagnostics in the run's log file.

The integrator reports one INFO line per iteration and, at DEBUG, one line per
grid point (evaluated or reused from the cache). The console shows messages as
plain text; the log file of a run keeps time, level and origin of each line.
"""

import sys
import logging


run_log_format = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RunLogFileHandler(logging.FileHandler):
    """The log file of one run. At most one is attached to the root logger."""


def reset_logging(level=logging.INFO):
    """
    Config the logger such that logging.info(...) works like print(...)
    """
    root_logger = logging.getLogger()

    # clear any existing handlers, closing the run log file if one is open
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
        if isinstance(h, RunLogFileHandler):
            h.close()

    # only messages, as if calling print(...)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    root_logger.setLevel(level)


def switch_log_file(log_file, level=logging.INFO):
    """
    Send the diagnostics of the following run to `log_file`.

    The log file of the previous run is closed. With level=logging.DEBUG the file
    also gets the per grid point lines, while the console keeps its own level.
    """
    root_logger = logging.getLogger()

    for h in list(root_logger.handlers):
        if isinstance(h, RunLogFileHandler):
            root_logger.removeHandler(h)
            h.close()

    file_handler = RunLogFileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(run_log_format))
    file_handler.setLevel(level)
    root_logger.addHandler(file_handler)

    # let the records through the root logger, the handlers do the filtering
    if root_logger.level == logging.NOTSET or root_logger.level > level:
        root_logger.setLevel(level)
    return file_handler
