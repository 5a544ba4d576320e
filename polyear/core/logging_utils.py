"""Logging utilities for polyear.

Provides a consistent logger hierarchy under the 'polyear' namespace without
modifying the process root logger. All polyear code should obtain loggers via
get_logger(). Nothing is printed until an application calls
configure_logging(); until then records propagate normally (so pytest's
caplog and the host application's handlers see them).
"""
from __future__ import annotations

import contextlib
import logging
import sys
from typing import Iterator, Optional, TextIO, Union

_ROOT = 'polyear'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


class _PolyearHandler(logging.StreamHandler):
    """Marker type so configure_logging() can find the handler it installed."""


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True,
                      stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single stream handler to the 'polyear' logger and set its level.

    Calling it again replaces the handler (e.g. to change stream) rather than
    stacking a second one. The 'polyear' logger stops propagating to the
    process root so records are not printed twice.
    """
    pkg_root = logging.getLogger(_ROOT)
    for h in list(pkg_root.handlers):
        if isinstance(h, (_PolyearHandler, logging.NullHandler)):
            pkg_root.removeHandler(h)
    handler = _PolyearHandler(stream=stream or sys.stdout)
    handler.setFormatter(_FORMAT)
    pkg_root.addHandler(handler)
    pkg_root.propagate = False
    lvl = _to_level(level)
    pkg_root.setLevel(lvl)
    # matplotlib is chatty at DEBUG
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager', 'PIL'):
            logging.getLogger(noisy).setLevel(logging.INFO)
    return pkg_root


def reset_logging() -> None:
    """Undo configure_logging(): drop our handler and restore propagation."""
    pkg_root = logging.getLogger(_ROOT)
    for h in list(pkg_root.handlers):
        if isinstance(h, _PolyearHandler):
            pkg_root.removeHandler(h)
    pkg_root.propagate = True
    pkg_root.setLevel(logging.NOTSET)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'polyear' namespace.

    Names outside the namespace are prefixed ('geometry' -> 'polyear.geometry').
    Without a level the logger inherits from its 'polyear' parent.
    """
    if name != _ROOT and not name.startswith(_ROOT + '.'):
        name = f'{_ROOT}.{name}'
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    return log


@contextlib.contextmanager
def log_level(logger: logging.Logger, level: Optional[Union[str, int]]) -> Iterator[logging.Logger]:
    """Temporarily set `logger` to `level`; a None level leaves it untouched."""
    if level is None:
        yield logger
        return
    previous = logger.level
    logger.setLevel(_to_level(level))
    try:
        yield logger
    finally:
        logger.setLevel(previous)


__all__ = ['get_logger', 'configure_logging', 'reset_logging', 'log_level']
