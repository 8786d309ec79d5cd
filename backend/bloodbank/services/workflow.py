from __future__ import annotations

from typing import Dict, Tuple

from loguru import logger

from ..errors import InvalidStatusError, InvalidTransitionError, NotFoundError
from ..models.common import TERMINAL_STATUSES, RecordKind, Status
from ..store import MongoStore
from ..utils.notifications import EmailNotification, Notifier
from .records import Record, to_record

APPROVAL_TEMPLATES: Dict[RecordKind, Tuple[str, str]] = {
    RecordKind.DONATION: ("Donation Approved", "Your donation has been approved, thank you!"),
    RecordKind.REQUEST: (
        "Blood Request Approved",
        "Your request for {units} unit(s) of {blood_type} is approved!",
    ),
}


def parse_target_status(value: str | Status) -> Status:
    try:
        status = Status(value)
    except ValueError as exc:
        raise InvalidStatusError(str(value)) from exc
    if status not in TERMINAL_STATUSES:
        raise InvalidStatusError(status.value)
    return status


def approval_notice(kind: RecordKind, record: Record, address: str) -> EmailNotification:
    subject, template = APPROVAL_TEMPLATES[kind]
    body = template.format(
        units=getattr(record, "units", ""),
        blood_type=record.blood_type.value,
    )
    return EmailNotification(to=address, subject=subject, body=body)


async def set_status(
    store: MongoStore,
    notifier: Notifier,
    kind: RecordKind,
    record_id: str,
    new_status: str | Status,
) -> Record:
    """Move a pending donation or request to approved or rejected.

    Only pending records can move. Approval hands one e-mail to ``notifier``
    when the owner is a registered user; delivery runs in the background and
    its outcome never affects the stored status.
    """
    status = parse_target_status(new_status)
    updated = await store.transition_record(kind, record_id, status)
    if updated is None:
        existing = await store.find_record(kind, record_id)
        if existing is None:
            raise NotFoundError(kind.value, record_id)
        raise InvalidTransitionError(kind.value, record_id, existing.get("status", "unknown"))

    record = to_record(kind, updated)
    logger.info("{} {} marked {}", kind.value.capitalize(), record.id, status.value)

    if status is Status.APPROVED:
        await _notify_owner(store, notifier, kind, record, updated.get(kind.owner_field))
    return record


async def _notify_owner(
    store: MongoStore, notifier: Notifier, kind: RecordKind, record: Record, owner_email: str | None
) -> None:
    # the status is already stored; nothing here may reach the caller
    try:
        user = await store.find_user(owner_email) if owner_email else None
        if not user:
            logger.info("No registered user for {}; skipping approval e-mail", owner_email)
            return
        notifier.dispatch(approval_notice(kind, record, user["email"]))
    except Exception as exc:
        logger.warning("Approval e-mail for {} {} not sent: {}", kind.value, record.id, exc)
