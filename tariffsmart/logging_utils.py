"""
Logging utilities.

- configure_logging(app): root level/format from LOG_LEVEL, called by create_app
- log_calculation_event(...): one structured JSON line per calculator run

Usage:
    from tariffsmart.logging_utils import log_calculation_event

    log_calculation_event("calculate", summary, user_id=None)
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Structured events go to their own logger so they can be routed separately
events_logger = logging.getLogger("tariffsmart.events")


class JSONFormatter(logging.Formatter):
    def format(self, record):
        if isinstance(record.msg, dict):
            return json.dumps(record.msg, default=str)
        return super().format(record)


def configure_logging(app) -> None:
    log_level_name = app.config.get("LOG_LEVEL", "INFO")
    log_level = getattr(logging, str(log_level_name).upper(), logging.INFO)

    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    if not events_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        events_logger.addHandler(handler)
        events_logger.propagate = False
    events_logger.setLevel(log_level)

    app.logger.setLevel(log_level)
    app.logger.debug("Logging configured, level=%s", log_level_name)


def log_event(event_type: str, payload: Dict[str, Any]) -> None:
    event = {
        "timestamp": datetime.utcnow().isoformat(),
        "event_type": event_type,
        **payload,
    }
    events_logger.info(event)


def log_calculation_event(event_type: str, summary, user_id: Optional[int] = None) -> None:
    """Log a calculator run (counts and totals only, never line-item contents)."""
    log_event(event_type, {
        "user_id": user_id,
        "items": len(summary.line_results),
        "unknown_countries": len(summary.errors),
        "total_spending": str(summary.total_spending),
        "total_increase": str(summary.total_increase),
    })
