from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from . import config

LOGGER_NAME = "page_factory"


class LogMode(str, Enum):
    LIVE = "live"
    DEBUG = "debug"
    TRACE = "trace"


class Cat(str, Enum):
    DEFINE = "DEFINE"
    LIFECYCLE = "LIFECYCLE"
    DISPATCH = "DISPATCH"
    FIT = "FIT"
    CATALOG = "CATALOG"
    STARTUP = "STARTUP"


@dataclass(frozen=True)
class InstrumentPolicy:
    mode: LogMode = LogMode.LIVE

    # If True, include ctx keys in all emitted lines.
    include_ctx: bool = True


def _policy_from_config() -> InstrumentPolicy:
    mode = LogMode(config.LOG_MODE) if config.LOG_MODE in ("live", "debug", "trace") else LogMode.LIVE
    return InstrumentPolicy(mode=mode)


_policy = _policy_from_config()


def get_policy() -> InstrumentPolicy:
    return _policy


def set_policy(policy: InstrumentPolicy) -> InstrumentPolicy:
    """Swap the active policy; returns the previous one so callers can restore it."""
    global _policy
    previous = _policy
    _policy = policy
    return previous


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def format_ctx(**ctx: Any) -> str:
    # Stable ordering makes grep life easier
    order = ["page", "name", "kind", "a"]
    parts = []
    for k in order:
        v = ctx.get(k)
        if v is None:
            continue
        parts.append(f"{k}={v}")
    # include any extras in alpha order
    extras = sorted((k, v) for k, v in ctx.items() if k not in order and v is not None)
    parts.extend([f"{k}={v}" for k, v in extras])
    return " ".join(parts)


def _render(cat: Cat, msg: str, ctx: dict[str, Any]) -> str:
    prefix = f"[{cat.value}]"
    if _policy.include_ctx:
        c = format_ctx(**ctx)
        if c:
            msg = f"{msg} :: {c}"
    return f"{prefix} {msg}"


def emit_signal(cat: Cat, msg: str, *, level: str | int = "info", **ctx: Any) -> None:
    # always allowed
    logger = get_logger()
    line = _render(cat, msg, ctx)
    if isinstance(level, int):
        logger.log(level, line)
        return
    lvl = (level or "info").lower()
    if lvl in ("warn", "warning"):
        logger.warning(line)
    elif lvl in ("error", "err", "critical", "fatal"):
        logger.error(line)
    elif lvl in ("debug", "trace"):
        logger.debug(line)
    else:
        logger.info(line)


def emit_diag(cat: Cat, msg: str, **ctx: Any) -> None:
    # gated by mode; DEBUG+ only
    if _policy.mode == LogMode.LIVE:
        return
    get_logger().debug(_render(cat, msg, ctx))


def emit_trace(cat: Cat, msg: str, **ctx: Any) -> None:
    if _policy.mode != LogMode.TRACE:
        return
    get_logger().debug(_render(cat, msg, ctx))


def setup_logging(verbose_console: bool = False, log_file: str | None = None) -> logging.Logger:
    logger = get_logger()
    logger.setLevel(logging.DEBUG)  # emit everything; handlers will filter

    # Clear existing handlers if this is called multiple times
    logger.handlers.clear()
    logger.propagate = False  # don't double-log via root

    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    formatter = logging.Formatter(fmt)

    # --- Console: WARNING (or DEBUG if verbose_console=True) ---
    console_handler = logging.StreamHandler()
    console_level = logging.DEBUG if verbose_console else logging.WARNING
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # --- File: DEBUG, truncated each run ---
    log_file = log_file or config.LOG_FILE
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler.name = "default_file"
        logger.addHandler(file_handler)

    return logger
