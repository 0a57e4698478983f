"""Internal diagnostic logging setup (stderr + optional file).

Category log lines travel through the same loguru logger but carry a sink
token; the diagnostic sinks below never receive them.
"""
import sys
from pathlib import Path
from loguru import logger
from .config import SETTINGS
from .constants import SINK_TOKEN_KEY

def _diagnostic_only(record) -> bool:
    return SINK_TOKEN_KEY not in record["extra"]

# Configure sinks (stderr & optional file)
logger.remove()
logger.add(
    sys.stderr,
    level=SETTINGS.DIAG_LOG_LEVEL,
    filter=_diagnostic_only,
    enqueue=True,
    backtrace=False,
    diagnose=False,
)
if SETTINGS.DIAG_LOG_FILE:
    Path(SETTINGS.DIAG_LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        SETTINGS.DIAG_LOG_FILE,
        level=SETTINGS.DIAG_LOG_LEVEL,
        filter=_diagnostic_only,
        rotation="5 MB",
        retention="14 days",
        enqueue=True,
    )

def get_logger(name: str):
    return logger.bind(component=name)
