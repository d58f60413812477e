from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from .request_id import get_request_id

QueryAction = Literal[
    "availability.checked",
    "availability.listed",
    "availability.alternatives",
    "pricing.resolved",
    "pricing.quoted",
]

_query_logger = logging.getLogger("inventory.query")
_query_logger.setLevel(logging.INFO)
if not _query_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    _query_logger.addHandler(handler)
_query_logger.propagate = False


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def emit_query_log(
    *,
    action: QueryAction,
    room_type_id: Optional[str] = None,
    customer_id: Optional[str] = None,
    check_in: Optional[datetime] = None,
    check_out: Optional[datetime] = None,
    result_count: Optional[int] = None,
    available: Optional[bool] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """Emit one JSON line describing a resolved query. Raises RuntimeError if logging fails."""
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": "info",
        "action": action,
        "request_id": get_request_id(),
        "room_type_id": room_type_id,
        "customer_id": customer_id,
        "check_in": _to_str(check_in),
        "check_out": _to_str(check_out),
        "result_count": result_count,
        "available": available,
    }
    if extra:
        payload.update(extra)

    compact_payload = {k: v for k, v in payload.items() if v is not None}
    try:
        _query_logger.info(json.dumps(compact_payload, ensure_ascii=True, default=str))
    except Exception as exc:
        raise RuntimeError("failed to emit query log") from exc
