"""
Verbosity-aware logging on top of Loguru.

The CLI connects its ProgramState once; from then on any LOG() call in the
lexer, parser or generator is emitted only if the state's verbosity is high
enough. With no state connected (library use, tests) LOG() is silent.

Verbosity levels:
    1 = normal progress messages (default)
    2 = verbose (-v): per-stage statistics, parse errors as they occur
    3 = debug (-vv): per-section / per-element trace

Usage:
    from lpml.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Parsed 3 sections", level=2)
"""

import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

from loguru import logger

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Loguru level name per verbosity level
LEVEL_NAMES: Dict[int, str] = {
    1: "INFO",
    2: "DEBUG",
    3: "TRACE",
}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{extra[stage]: <14}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.configure(extra={"stage": "lpml"})
logger.add(sys.stderr, format=logger_format, level="TRACE")


def state_connectToLogger(state: Any) -> None:
    """
    Make a ProgramState's verbosity govern LOG() in the current context.

    Args:
        state: Object with an integer ``verbosity`` attribute
    """
    _program_state.set(state)


def state_disconnectFromLogger() -> None:
    """Silence LOG() again for the current context"""
    _program_state.set(None)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Text to log
        level: Minimum verbosity required (1-3)
        **kwargs: Passed through to loguru (e.g. ``stage="parse"``)
    """
    state = _program_state.get()
    if state is None or getattr(state, 'verbosity', 0) < level:
        return

    stage = kwargs.pop("stage", "lpml")
    level_name = LEVEL_NAMES.get(level, "TRACE")
    logger.opt(depth=1).bind(stage=stage).log(level_name, message, **kwargs)
