"""
Projects repository

CRUD for portfolio projects plus the derived views used by the portfolio
grid. by_category() and featured() filter one fetched page client-side, so
they are only complete when limit is at least the total number of projects.
"""
from typing import Optional

from portfolio.projects.constants import DEFAULT_PROJECTS
from portfolio.projects.schemas import validate_project, validate_project_update
from portfolio.shared.local_store import LocalStore, PROJECTS_KEY
from portfolio.shared.repository import CrudRepository, LocalStrategy, RemoteStrategy
from portfolio.shared.transport import TransportClient


class ProjectRepository(CrudRepository):
    resource_name = "project"

    def validate_create(self, data: dict) -> dict:
        return validate_project(data)

    def validate_update(self, data: dict) -> dict:
        return validate_project_update(data)

    def by_category(self, category: str, limit: int = 100) -> list[dict]:
        page = self.list(page=1, limit=limit, search=category)
        return [p for p in page.data if p.get("category") == category]

    def featured(self, limit: int = 100) -> list[dict]:
        page = self.list(page=1, limit=limit)
        return [p for p in page.data if p.get("featured")]

    def toggle_featured(self, record_id: str, featured: bool) -> dict:
        return self.update(record_id, {"featured": featured})


def build_project_repository(
    store: LocalStore,
    transport: Optional[TransportClient] = None,
) -> ProjectRepository:
    local = LocalStrategy(store, PROJECTS_KEY, "project", defaults=lambda: DEFAULT_PROJECTS)
    remote = RemoteStrategy(transport, "/projects", "project") if transport else None
    return ProjectRepository(local, remote)
