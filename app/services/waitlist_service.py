import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional

from sqlalchemy import case, desc, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, InfrastructureError, ValidationError
from app.models.waitlist_entry import WaitlistEntry, utcnow
from app.services.waitlist_validation import validate_registration
from app.utils.audit import audit

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
# Larger page/limit values fall back to the defaults; keeps OFFSET inside a signed 64-bit integer
MAX_PAGE_PARAM = 2**31 - 1
DUPLICATE_EMAIL_MESSAGE = "This email is already on the waitlist"


@dataclass
class WaitlistPage:
    items: List[WaitlistEntry]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


@dataclass
class WaitlistCounts:
    total: int
    notified: int
    not_notified: int


@contextmanager
def store_errors(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise store failures as InfrastructureError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Waitlist %s failed: %s", operation, e, exc_info=True)
        raise InfrastructureError(details=str(e)) from e


class WaitlistRegistrationService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[WaitlistEntry]:
        return self.db.query(WaitlistEntry).filter(WaitlistEntry.email == email).first()

    def register(self, payload: Mapping[str, Any]) -> WaitlistEntry:
        """Validate, reject duplicates, then insert a new waitlist entry."""
        try:
            registration = validate_registration(payload)
        except ValidationError as e:
            audit("WAITLIST_REJECTED", reason=e.message)
            raise

        with store_errors(self.db, "registration"):
            if self.get_by_email(registration.email) is not None:
                audit("WAITLIST_DUPLICATE", email=registration.email, path="precheck")
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

            entry = WaitlistEntry(
                email=registration.email,
                name=registration.name,
                phone=registration.phone,
                created_at=utcnow(),
                notified=False,
            )
            self.db.add(entry)
            try:
                self.db.flush()
                # Detached before commit so the returned values are not expired and reloaded
                self.db.expunge(entry)
                self.db.commit()
            except IntegrityError as e:
                # A concurrent registration won the race to the unique constraint
                self.db.rollback()
                audit("WAITLIST_DUPLICATE", email=registration.email, path="constraint")
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e

        logger.info("New waitlist signup id=%s", entry.id)
        audit("WAITLIST_JOINED", email=entry.email, entry_id=str(entry.id))
        return entry


class WaitlistQueryService:
    def __init__(self, db: Session):
        self.db = db

    def list_entries(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT, notified: Optional[bool] = None) -> WaitlistPage:
        """Newest signups first, optionally filtered on the notified flag."""
        with store_errors(self.db, "listing"):
            query = self.db.query(WaitlistEntry)
            if notified is not None:
                query = query.filter(WaitlistEntry.notified.is_(notified))
            total = query.count()
            items = (
                query.order_by(desc(WaitlistEntry.created_at), desc(WaitlistEntry.id))
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
        return WaitlistPage(items=items, page=page, limit=limit, total=total)

    def count(self) -> WaitlistCounts:
        # One aggregate so total == notified + not_notified for the snapshot read
        with store_errors(self.db, "count"):
            total, notified = self.db.query(
                func.count(WaitlistEntry.id),
                func.coalesce(func.sum(case((WaitlistEntry.notified.is_(True), 1), else_=0)), 0),
            ).one()
        total = int(total or 0)
        notified = int(notified or 0)
        return WaitlistCounts(total=total, notified=notified, not_notified=total - notified)


def _positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if 1 <= parsed <= MAX_PAGE_PARAM else default


def parse_page_params(page: Optional[str], limit: Optional[str], notified: Optional[str]):
    """Parse listing query strings; bad or missing numbers fall back to defaults.

    ``notified`` filters only when present: "true" selects notified entries,
    anything else selects the rest.
    """
    notified_filter = None
    if notified is not None:
        notified_filter = notified.strip().lower() == "true"
    return _positive_int(page, DEFAULT_PAGE), _positive_int(limit, DEFAULT_LIMIT), notified_filter
