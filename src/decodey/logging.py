"""structlog setup for the game.

Everything is written to stderr so log lines never interleave with the board
on stdout. Quiet runs show only warnings, without timestamps; ``--verbose``
adds move-by-move debug events.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

HIDDEN = "<hidden>"
SPOILER_KEYS = frozenset({"solution", "source_text", "plain", "decode_map"})


def hide_spoilers(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask values that would give the puzzle away."""
    for key in SPOILER_KEYS & event_dict.keys():
        event_dict[key] = HIDDEN
    return event_dict


def _processors(verbose: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        hide_spoilers,
    ]
    if verbose:
        processors += [
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
        ]
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty(), pad_event=20),
    ]
    return processors


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=_processors(verbose),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
