"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing, plus logSink_make()
which adapts LOG() to the single-argument log sink the Processor accepts.

Usage:
    from lib.log import LOG, state_connectToLogger

    # At start of pipeline function:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Rewrote 3 documents", level=1)
    LOG("Block for js/app.min.js replaced", level=2)
    LOG("Looking up js/app.js in ['site']", level=3)
"""

from loguru import logger
from typing import Any, Callable, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Call this at the start of a pipeline to make the state's verbosity
    setting available to LOG() calls throughout that context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Nothing is emitted when no state is connected, so library callers stay
    quiet unless they opt in.
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)


def logSink_make(level: int = 2) -> Callable[[str], None]:
    """
    Build a Processor log sink that forwards to LOG() at a fixed level.

    Args:
        level: Verbosity level the forwarded messages require

    Returns:
        Single-argument callable suitable for Processor(log=...)
    """
    def sink(message: str) -> None:
        LOG(message, level=level)

    return sink
