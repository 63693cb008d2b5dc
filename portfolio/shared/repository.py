"""
Repository base classes and backing-store strategies.

A repository owns one REST resource path and one local store key. It is
built once at startup with a LocalStrategy and, when an API is configured,
a RemoteStrategy:

- reads go remote -> local store -> hard-coded defaults
- writes go to the remote API when one is configured, otherwise straight
  to the local store

Remote writes are best-effort and non-transactional. A failed remote write
propagates to the caller; nothing is queued, retried later or mirrored into
the local store.
"""
import copy
import logging
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from portfolio.shared.errors import NotFoundError, StorageError, TransportError
from portfolio.shared.local_store import LocalStore
from portfolio.shared.transport import TransportClient

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"
SOURCE_DEFAULT = "default"


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Page:
    """One page of records plus where they came from."""
    data: list[dict] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 100
    source: str = SOURCE_REMOTE

    def to_dict(self) -> dict:
        return asdict(self)


class RemoteStrategy:
    """Backing store that talks to one REST resource through the TransportClient."""

    def __init__(self, transport: TransportClient, resource_path: str, resource_name: str):
        self.transport = transport
        self.resource_path = "/" + resource_path.strip("/")
        self.resource_name = resource_name

    def _item_path(self, record_id: str) -> str:
        return f"{self.resource_path}/{record_id}"

    def _call(self, record_id: Optional[str], fn: Callable[[], Any]) -> Any:
        try:
            return fn()
        except TransportError as e:
            if record_id is not None and e.last_status == 404:
                raise NotFoundError(self.resource_name, record_id) from e
            raise

    def list(self, params: dict) -> dict:
        response = self.transport.get(self.resource_path, params=params)
        return response or {}

    def get(self, record_id: str) -> dict:
        return self._call(record_id, lambda: self.transport.get(self._item_path(record_id)))

    def create(self, body: dict) -> dict:
        record = self.transport.post(self.resource_path, json=body)
        if not record or "id" not in record:
            # The id is server-assigned, so a create must echo the stored record
            raise TransportError(
                attempts=1,
                last_message=f"API did not return the created {self.resource_name}",
            )
        return record

    def update(self, record_id: str, body: dict, method: str = "PUT") -> dict:
        return self._call(
            record_id,
            lambda: self.transport.request(self._item_path(record_id), method=method, json=body),
        ) or {"id": record_id, **body}

    def delete(self, record_id: str) -> None:
        self._call(record_id, lambda: self.transport.delete(self._item_path(record_id)))


class LocalStrategy:
    """
    Backing store that keeps a whole collection under one local store key.

    An empty or unreadable entry reads as the default dataset; the first
    write then persists the defaults together with the change.
    """

    def __init__(
        self,
        store: LocalStore,
        key: str,
        resource_name: str,
        defaults: Callable[[], Any] = list,
    ):
        self.store = store
        self.key = key
        self.resource_name = resource_name
        self.defaults = defaults

    def load(self) -> Optional[Any]:
        """Stored value, or None when the entry is missing or corrupt."""
        try:
            return self.store.load(self.key)
        except StorageError as e:
            logger.warning(f"Ignoring local {self.resource_name} data: {e}")
            return None

    def snapshot(self) -> tuple[Any, str]:
        stored = self.load()
        if stored is None:
            return copy.deepcopy(self.defaults()), SOURCE_DEFAULT
        return stored, SOURCE_LOCAL

    def save(self, value: Any) -> None:
        self.store.save(self.key, value)

    def records(self) -> list[dict]:
        records, _ = self.snapshot()
        return records

    def list(self, page: int, limit: int, search: str = "", sort: str = "") -> Page:
        records, source = self.snapshot()
        if search:
            records = [r for r in records if matches_search(r, search)]
        if sort:
            records = sort_records(records, sort)
        start = (page - 1) * limit
        return Page(
            data=records[start:start + limit],
            total=len(records),
            page=page,
            limit=limit,
            source=source,
        )

    def get(self, record_id: str) -> dict:
        for record in self.records():
            if record.get("id") == record_id:
                return record
        raise NotFoundError(self.resource_name, record_id)

    def create(self, body: dict) -> dict:
        records = self.records()
        record = {**body, "id": new_id()}
        records.append(record)
        self.save(records)
        return record

    def update(self, record_id: str, changes: dict) -> dict:
        records = self.records()
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                records[index] = {**record, **changes, "id": record_id}
                self.save(records)
                return records[index]
        raise NotFoundError(self.resource_name, record_id)

    def delete(self, record_id: str) -> None:
        records = self.records()
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            raise NotFoundError(self.resource_name, record_id)
        self.save(remaining)


def matches_search(record: dict, search: str) -> bool:
    """Case-insensitive substring match over text fields and tags."""
    needle = search.lower()
    for value in record.values():
        if isinstance(value, str) and needle in value.lower():
            return True
        if isinstance(value, list) and any(
            isinstance(item, str) and needle in item.lower() for item in value
        ):
            return True
    return False


def sort_records(records: list[dict], sort: str) -> list[dict]:
    """Sort by one field; a leading '-' sorts descending. Missing values sort first."""
    reverse = sort.startswith("-")
    key = sort.lstrip("-")
    return sorted(records, key=lambda r: str(r.get(key) or ""), reverse=reverse)


class Repository:
    """
    Owns the fallback chain for one resource kind.

    The chain is explicit: try the remote strategy, on TransportError read the
    local store, and let the local strategy fall back to the defaults.
    """
    resource_name = "record"

    def __init__(self, local: LocalStrategy, remote: Optional[RemoteStrategy] = None):
        self.local = local
        self.remote = remote

    def _read(self, operation: str, from_remote: Callable[[], Any], from_local: Callable[[], Any]) -> Any:
        if self.remote is not None:
            try:
                return from_remote()
            except TransportError as e:
                logger.warning(
                    f"{operation}: API unavailable after {e.attempts} attempt(s) "
                    f"({e.last_message}), falling back to local data"
                )
        return from_local()

    def _refresh_cache(self, value: Any) -> None:
        """Best-effort copy of remote data into the local store."""
        try:
            self.local.save(value)
        except StorageError as e:
            logger.warning(f"Could not refresh local {self.resource_name} cache: {e}")


class CrudRepository(Repository):
    """
    list/get/create/update/delete over one collection.

    Subclasses provide the validation gate for writes and may restrict which
    fields an update is allowed to touch.
    """
    immutable_fields: tuple[str, ...] = ("id", "created_at")
    update_method = "PUT"

    def validate_create(self, data: dict) -> dict:
        raise NotImplementedError

    def validate_update(self, data: dict) -> dict:
        raise NotImplementedError

    def prepare_create(self, body: dict) -> dict:
        """Stamp server-owned fields on a validated create body."""
        body = {k: v for k, v in body.items() if k not in ("id", "created_at", "updated_at")}
        body["created_at"] = utc_now()
        return body

    def list(self, page: int = 1, limit: int = 100, search: str = "", sort: str = "created_at") -> Page:
        params = {"page": page, "limit": limit, "search": search, "sort": sort}

        def from_remote() -> Page:
            response = self.remote.list(params)
            data = response.get("data") or []
            if "total" in response:
                complete = len(data) >= response["total"]
            else:
                complete = len(data) < limit
            if page == 1 and not search and complete:
                self._refresh_cache(data)
            return Page(
                data=data,
                total=response.get("total", len(data)),
                page=page,
                limit=limit,
                source=SOURCE_REMOTE,
            )

        return self._read(
            f"List {self.resource_name}",
            from_remote,
            lambda: self.local.list(page, limit, search, sort),
        )

    def get(self, record_id: str) -> dict:
        return self._read(
            f"Get {self.resource_name} {record_id}",
            lambda: self.remote.get(record_id),
            lambda: self.local.get(record_id),
        )

    def create(self, data: dict) -> dict:
        body = self.prepare_create(self.validate_create(data))
        if self.remote is not None:
            record = self.remote.create(body)
        else:
            record = self.local.create(body)
        logger.info(f"Created {self.resource_name} {record.get('id')}")
        return record

    def update(self, record_id: str, data: dict) -> dict:
        changes = {
            k: v for k, v in self.validate_update(data).items()
            if k not in self.immutable_fields
        }
        return self._write_changes(record_id, changes)

    def _write_changes(self, record_id: str, changes: dict) -> dict:
        changes["updated_at"] = utc_now()
        if self.remote is not None:
            record = self.remote.update(record_id, changes, method=self.update_method)
        else:
            record = self.local.update(record_id, changes)
        logger.info(f"Updated {self.resource_name} {record_id}")
        return record

    def delete(self, record_id: str) -> None:
        if self.remote is not None:
            self.remote.delete(record_id)
        else:
            self.local.delete(record_id)
        logger.info(f"Deleted {self.resource_name} {record_id}")
