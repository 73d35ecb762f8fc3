from __future__ import annotations

from contextlib import contextmanager
from typing import Any
import time

from . import config
from .instrumentation import Cat, emit_signal


@contextmanager
def phase_timer(
    label: str,
    *,
    cat: Cat = Cat.LIFECYCLE,
    ctx: dict[str, Any] | None = None,
    slow_s: float | None = None,
):
    slow_s = config.SLOW_PHASE_S if slow_s is None else slow_s
    start = time.perf_counter()
    merged_ctx: dict[str, Any] = {"a": label}
    if ctx:
        merged_ctx.update(ctx)
    emit_signal(cat, f"START phase: {label}", level="debug", **merged_ctx)
    try:
        yield
    except Exception:
        elapsed = time.perf_counter() - start
        merged_ctx["elapsed_s"] = round(elapsed, 3)
        emit_signal(cat, f"END phase: {label} (failed after {elapsed:.2f} seconds)", level="warning",
                    failed=True, **merged_ctx)
        raise
    else:
        elapsed = time.perf_counter() - start
        merged_ctx["elapsed_s"] = round(elapsed, 3)
        if elapsed >= slow_s:
            emit_signal(cat, f"END phase: {label} (slow, {elapsed:.2f} seconds)", level="warning", **merged_ctx)
        else:
            emit_signal(cat, f"END phase: {label} ({elapsed:.2f} seconds)", level="debug", **merged_ctx)
