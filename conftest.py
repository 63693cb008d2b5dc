"""
Shared fixtures: an in-memory local store and a fake /tables REST API.

FakeTablesSession answers the same calls TransportClient makes on a
requests.Session, so repositories run their real retry and fallback code
without any network access.
"""
import copy
import json
import uuid

import pytest
import requests

from portfolio.messages.repository import build_message_repository
from portfolio.profile.repository import build_profile_repository
from portfolio.projects.repository import build_project_repository
from portfolio.shared.database import make_engine
from portfolio.shared.local_store import LocalStore
from portfolio.shared.transport import TransportClient

API_URL = "http://api.test"
BASE_URL = f"{API_URL}/tables"


class FakeResponse:
    def __init__(self, status_code: int, body=None, text: str = ""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return copy.deepcopy(self._body)


class FakeTablesSession:
    """In-memory stand-in for the REST tables API."""

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.tables = {"projects": {}, "profile": {}, "contact_messages": {}}
        self.calls = []
        self.down = False
        self.fail_next = 0
        self.empty_create = False

    def count(self, method: str, table: str) -> int:
        return sum(1 for m, path, _, _ in self.calls if m == method and path.split("/")[1] == table)

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append((method, path, params, json))

        if self.down:
            raise requests.ConnectionError("Connection refused")
        if self.fail_next:
            self.fail_next -= 1
            return FakeResponse(503, text="Service Unavailable")

        parts = path.strip("/").split("/")
        rows = self.tables[parts[0]]
        record_id = parts[1] if len(parts) > 1 else None

        if record_id is None:
            if method == "GET":
                params = params or {}
                page = int(params.get("page", 1))
                limit = int(params.get("limit", 100))
                data = list(rows.values())
                start = (page - 1) * limit
                return FakeResponse(200, {
                    "data": data[start:start + limit],
                    "total": len(data),
                    "page": page,
                    "limit": limit,
                })
            if method == "POST":
                row = {**json, "id": uuid.uuid4().hex}
                rows[row["id"]] = row
                if self.empty_create:
                    return FakeResponse(204)
                return FakeResponse(201, row)
            return FakeResponse(405, text="Method Not Allowed")

        if record_id not in rows:
            return FakeResponse(404, text="Not Found")
        if method == "GET":
            return FakeResponse(200, rows[record_id])
        if method in ("PUT", "PATCH"):
            rows[record_id] = {**rows[record_id], **json, "id": record_id}
            return FakeResponse(200, rows[record_id])
        if method == "DELETE":
            del rows[record_id]
            return FakeResponse(204)
        return FakeResponse(405, text="Method Not Allowed")


@pytest.fixture
def store():
    return LocalStore(make_engine("sqlite://"))


@pytest.fixture
def api():
    return FakeTablesSession()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def transport(api, sleeps):
    return TransportClient(BASE_URL, session=api, sleep=sleeps.append)


@pytest.fixture
def local_projects(store):
    return build_project_repository(store)


@pytest.fixture
def api_projects(store, transport):
    return build_project_repository(store, transport)


@pytest.fixture
def local_profile(store):
    return build_profile_repository(store)


@pytest.fixture
def api_profile(store, transport):
    return build_profile_repository(store, transport)


@pytest.fixture
def local_messages(store):
    return build_message_repository(store)


@pytest.fixture
def api_messages(store, transport):
    return build_message_repository(store, transport)
