# leansim/core/logging.py
# -----------------------------------------------------------------------------
# Loguru-based logging setup
# - stderr sink at the configured level
# - optional rotating file sink with backtrace/diagnose when LOG_DIR is set
# -----------------------------------------------------------------------------
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from leansim.core.config import settings


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    level = (level or settings.LOG_LEVEL).upper()
    log_dir = log_dir or settings.LOG_DIR

    logger.remove()  # drop the default handler
    logger.add(sys.stderr, level=level)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(exist_ok=True, parents=True)
        logger.add(
            path / "leansim.log",
            rotation="10 MB",
            retention="10 files",
            enqueue=True,  # safe across processes
            backtrace=True,
            diagnose=True,
            level=level,
        )
