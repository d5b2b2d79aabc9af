from contextlib import contextmanager
import logging
import sys
import time

_handler = logging.StreamHandler(sys.stderr)
_formatter = logging.Formatter("[%(asctime)s %(levelname)s] %(message)s")
_handler.setFormatter(_formatter)
logger = logging.getLogger("rangetree")
logger.propagate = False


def logger_setup(level=logging.INFO):
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    logger.setLevel(level)


def undo_logger_setup():
    logger.removeHandler(_handler)
    logger.setLevel(logging.NOTSET)


@contextmanager
def timeit(s):
    t0 = time.time()
    try:
        yield
    finally:
        print("{} done in {:2f}s".format(s, time.time() - t0), file=sys.stderr)
