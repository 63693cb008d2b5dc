"""
Contact messages repository

Every new message starts in status "new" with a creation time set here,
whatever the caller sent. update_status() is the only way to change status.
"""
import logging
from typing import Optional

from portfolio.messages.schemas import (
    validate_contact_message,
    validate_message_update,
    validate_status,
)
from portfolio.shared.local_store import LocalStore, MESSAGES_KEY
from portfolio.shared.repository import (
    CrudRepository,
    LocalStrategy,
    Page,
    RemoteStrategy,
)
from portfolio.shared.transport import TransportClient

logger = logging.getLogger(__name__)


class MessageRepository(CrudRepository):
    resource_name = "contact message"
    immutable_fields = ("id", "created_at", "status")
    update_method = "PATCH"

    def validate_create(self, data: dict) -> dict:
        return validate_contact_message(data)

    def validate_update(self, data: dict) -> dict:
        return validate_message_update(data)

    def prepare_create(self, body: dict) -> dict:
        body = super().prepare_create(body)
        body["status"] = "new"
        return body

    def list(self, page: int = 1, limit: int = 50, search: str = "", sort: str = "created_at") -> Page:
        return super().list(page=page, limit=limit, search=search, sort=sort)

    def update_status(self, record_id: str, status: str) -> dict:
        changes = {"status": validate_status(status)}
        if self.remote is not None:
            record = self.remote.update(record_id, changes, method="PATCH")
        else:
            record = self.local.update(record_id, changes)
        logger.info(f"Marked contact message {record_id} as {changes['status']}")
        return record


def build_message_repository(
    store: LocalStore,
    transport: Optional[TransportClient] = None,
) -> MessageRepository:
    local = LocalStrategy(store, MESSAGES_KEY, "contact message")
    remote = RemoteStrategy(transport, "/contact_messages", "contact message") if transport else None
    return MessageRepository(local, remote)
