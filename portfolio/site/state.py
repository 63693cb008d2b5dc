"""
Application state for the portfolio site.

All repositories are built once, from one Settings snapshot, and share one
local store and one transport client. Whether writes go to the API or to
the local store is decided here and nowhere else.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from portfolio.messages.repository import MessageRepository, build_message_repository
from portfolio.profile.repository import ProfileRepository, build_profile_repository
from portfolio.projects.repository import ProjectRepository, build_project_repository
from portfolio.shared.config import Settings, load_settings
from portfolio.shared.database import make_engine
from portfolio.shared.local_store import LocalStore
from portfolio.shared.transport import TransportClient

logger = logging.getLogger(__name__)


@dataclass
class PortfolioState:
    settings: Settings
    store: LocalStore
    transport: Optional[TransportClient]
    projects: ProjectRepository
    profile: ProfileRepository
    messages: MessageRepository


def build_state(
    settings: Optional[Settings] = None,
    store: Optional[LocalStore] = None,
    session: Optional[Any] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PortfolioState:
    """
    Wire repositories for the configured mode.

    session and sleep are passed through to the TransportClient; store
    defaults to a LocalStore on settings.local_store_url.
    """
    settings = settings or load_settings()
    store = store or LocalStore(make_engine(settings.local_store_url))

    transport = None
    if settings.api_backed:
        transport = TransportClient(
            settings.base_url,
            retry_count=settings.retry_count,
            retry_delay=settings.retry_delay,
            timeout=settings.request_timeout,
            session=session,
            sleep=sleep,
        )
        logger.info(f"Portfolio data is API-backed: {settings.base_url}")
    else:
        logger.info("No PORTFOLIO_API_URL configured, running in local-only mode")

    return PortfolioState(
        settings=settings,
        store=store,
        transport=transport,
        projects=build_project_repository(store, transport),
        profile=build_profile_repository(store, transport),
        messages=build_message_repository(store, transport),
    )
