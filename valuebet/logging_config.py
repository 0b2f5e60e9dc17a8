"""
Logging setup for CLI runs
"""
import logging
import os
from typing import Optional


def configure_logging(run_id: Optional[str] = None) -> None:
    """
    Configure root logging for a CLI run

    Args:
        run_id: Optional id prefixed to every record
    """
    level_name = os.environ.get("VALUEBET_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    run_prefix = f"[run_id={run_id}] " if run_id else ""
    fmt = "%(asctime)s %(levelname)s " + run_prefix + "%(name)s: %(message)s"
    logging.basicConfig(level=level, format=fmt, force=True)
