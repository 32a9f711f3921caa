"""structlog configuration for docharvest runs.

Every event passes through one processor chain (context vars, level,
timestamp, stack and exception info).  Only the final renderer differs:

- ``ConsoleRenderer`` for interactive runs, coloured when stderr is a TTY
- ``JSONRenderer`` for batch jobs, selected by ``app_env="production"`` or an
  explicit ``json_output=True``; exceptions become structured dicts

Events are written to stderr so the CLI's stdout summary stays clean.  The
stdlib root logger is routed through the same chain, so warnings emitted by
pydantic or PyYAML look like ours.

The orchestrator binds ``document=<path>`` as a context variable around each
recognizer call, so recognizer events identify their document without the
recognizers knowing about paths.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import structlog


def _pick_renderer(
    json_output: bool | None, app_env: str | None, stream: TextIO
) -> list[structlog.types.Processor]:
    if json_output is None:
        env = app_env if app_env is not None else os.environ.get("APP_ENV", "development")
        json_output = env == "production"
    if json_output:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    is_tty = hasattr(stream, "isatty") and stream.isatty()
    return [structlog.dev.ConsoleRenderer(colors=is_tty)]


def configure_logging(
    log_level: str = "INFO",
    json_output: bool | None = None,
    stream: TextIO | None = None,
    app_env: str | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        json_output: ``True`` forces JSON, ``False`` forces console output,
            ``None`` decides from the environment name.
        stream: Destination for rendered events.  Defaults to ``sys.stderr``.
        app_env: Environment name, usually ``Settings.app_env``;
            ``"production"`` selects JSON.  Falls back to ``APP_ENV``.

    Returns:
        A logger bound to the new configuration.
    """
    out = stream if stream is not None else sys.stderr
    level = logging.getLevelName(log_level.upper())

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    rendering = _pick_renderer(json_output, app_env, out)

    structlog.configure(
        processors=[*pre_chain, *rendering],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *rendering,
            ],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    return structlog.get_logger()
