import logging
import sys
from typing import Optional

from ..config import get_settings

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging once per process; the query logger keeps its own handler."""
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    _configured = True
