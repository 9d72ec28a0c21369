"""
Logging for slidemark on top of Loguru.

Two kinds of messages go through LOG():

- Progress and trace output (severity DEBUG, the default). Shown only when
  the verbosity of the connected ProgramState reaches the message's level,
  so library calls made outside the CLI stay quiet.
- Diagnostics the user must see: expansion errors on a slide, the template
  round cap, embed cycles, and the pass dumps requested with options.log.
  These use INFO or above and are emitted whatever the verbosity.

    from .log import LOG

    LOG(f"Expanding template {filename}", level=3)
    LOG(f"Cannot process template: {e}", severity="ERROR")
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# ProgramState of the running CLI invocation, if any
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

_ALWAYS_EMITTED = {"INFO", "WARNING", "ERROR", "CRITICAL"}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{name}:{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Make a state's verbosity govern DEBUG output in this context.

    Args:
        state: Object with an integer ``verbosity`` (normally ProgramState)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, severity: str = "DEBUG", **kwargs: Any) -> None:
    """
    Emit a message through Loguru.

    Args:
        message: Text to log
        level: Verbosity needed for DEBUG messages (1 default, 2 with -v,
               3 with -vv); ignored for INFO and above
        severity: Loguru level name
        **kwargs: Passed on to Loguru
    """
    # depth=1 attributes the record to the caller
    if severity in _ALWAYS_EMITTED:
        logger.opt(depth=1).log(severity, message, **kwargs)
        return

    state = _program_state.get()
    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).log(severity, message, **kwargs)
