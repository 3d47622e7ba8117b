"""Logging utilities for spatia.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All spatia code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'spatia'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_spatia_root() -> logging.Logger:
    """Ensure the 'spatia' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'spatia' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # Replace the package NullHandler with a StreamHandler on first use
    has_stream = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_stream:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> logging.Logger:
    """Configure the 'spatia' logger family level.

    This does NOT modify the process root logger.
    """
    root = _ensure_spatia_root()
    root.setLevel(_to_level(level))
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'spatia' namespace.

    Without a level the logger is left at NOTSET so it inherits from the
    'spatia' parent configured via configure_logging(). Names outside the
    namespace are prefixed with 'spatia.'.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    else:
        log.setLevel(logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
