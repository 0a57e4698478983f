from __future__ import annotations
import argparse
from dataclasses import replace

from ..common.config import SETTINGS
from ..hublog.categories import LogCategory
from ..hublog.registry import LoggerRegistry

def emit(category: str, caller: str, message: str, log_dir: str | None = None) -> str:
    """Write one line to a category log and return the file it landed in."""
    settings = replace(SETTINGS, LOG_DIR=log_dir) if log_dir else SETTINGS
    with LoggerRegistry(settings) as logs:
        logger = logs.get(category)
        logger.write(caller, message)
        return str(logger.sink.path)

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Write a line to a DMRHub category log")
    ap.add_argument("--category", required=True, choices=[c.value for c in LogCategory])
    ap.add_argument("--caller", default="tools.logwrite", help="Tag shown before the message")
    ap.add_argument("--log-dir", default=None, help="Override the preferred log directory")
    ap.add_argument("message")
    args = ap.parse_args()
    print(emit(args.category, args.caller, args.message, args.log_dir))
