#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from toolo.logs import LOGGER_NAME, set_logger


# Helpers --------------------------------------------------------------------------------------------------------------

class BufferLogger:
    """Print-style logger collecting everything into ``buf``."""

    def __init__(self):
        self.buf = ""

    def println(self, *args):
        self.buf += " ".join(str(a) for a in args) + "\n"

    def printf(self, fmt, *args):
        self.buf += fmt % args

    def print(self, *args):
        self.buf += "".join(str(a) for a in args)

    def panicln(self, *args):
        raise RuntimeError(" ".join(str(a) for a in args))


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def buffer_logger():
    """Route the package logger into a fresh BufferLogger, restoring the default afterwards."""
    logger = BufferLogger()
    set_logger(logger)
    yield logger
    set_logger(logging.getLogger(LOGGER_NAME))
