from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


def get_logger(*, mode: str = "full") -> logging.Logger:
    """
    Configure and return the diagnostics logger.

    Logs go to stderr only so that stdout carries nothing but the reports.
    """
    logger = logging.getLogger("secretary_sim")
    logger.setLevel(logging.INFO)

    # Avoid duplicate handlers if called multiple times in-process.
    if getattr(logger, "_configured", False):
        return logger

    fmt = logging.Formatter(
        fmt=f"%(asctime)s | %(levelname)s | {mode} | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(logging.INFO)
    sh.setFormatter(fmt)

    logger.addHandler(sh)
    logger.propagate = False
    logger._configured = True  # type: ignore[attr-defined]
    return logger


def emit_report(text: str, *, stream: Optional[TextIO] = None) -> None:
    """Write one report block to stdout (or `stream`) and flush it."""
    out = sys.stdout if stream is None else stream
    out.write(text)
    if not text.endswith("\n"):
        out.write("\n")
    out.flush()
