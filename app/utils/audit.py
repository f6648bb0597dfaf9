import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

_logger = logging.getLogger("audit")


def email_hash(email: Optional[str]) -> Optional[str]:
    """Short stable digest of a normalized email, for correlating log lines."""
    if not email:
        return None
    return hashlib.sha256(email.strip().lower().encode()).hexdigest()[:12]


def audit(event: str, *, email: Optional[str] = None, **fields: Any) -> None:
    """Write one waitlist audit event as a JSON line; addresses appear only hashed."""
    record = {"ts": datetime.now(timezone.utc).isoformat(), "event": event}
    if email:
        record["email_hash"] = email_hash(email)
    record.update(fields)
    _logger.info(json.dumps(record, ensure_ascii=False, default=str))


def configure_audit_logger() -> logging.Logger:
    """Send audit events to their own stream as bare JSON, outside the root logger."""
    if not _logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        _logger.addHandler(handler)
    _logger.setLevel(logging.INFO)
    _logger.propagate = False
    return _logger
