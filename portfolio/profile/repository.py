"""
Profile repository

The profile is a singleton. update() is an upsert built from two verbs: it
looks the profile up (limit 1) and issues a PUT against its id when one
exists, otherwise a POST.
"""
import logging
from typing import Optional

from portfolio.profile.constants import DEFAULT_PROFILE
from portfolio.profile.schemas import validate_profile
from portfolio.shared.local_store import LocalStore, PROFILE_KEY
from portfolio.shared.repository import (
    LocalStrategy,
    RemoteStrategy,
    Repository,
    SOURCE_DEFAULT,
    new_id,
    utc_now,
)
from portfolio.shared.transport import TransportClient

logger = logging.getLogger(__name__)


class ProfileRepository(Repository):
    resource_name = "profile"

    def _fetch_remote(self) -> Optional[dict]:
        response = self.remote.list({"limit": 1})
        data = response.get("data") or []
        return data[0] if data else None

    def get(self) -> Optional[dict]:
        """
        Current profile, following the fallback chain.

        Returns None only when the API is reachable and holds no profile.
        """
        def from_remote() -> Optional[dict]:
            profile = self._fetch_remote()
            if profile is not None:
                self._refresh_cache(profile)
            return profile

        return self._read("Get profile", from_remote, self._from_local)

    def _from_local(self) -> dict:
        profile, source = self.local.snapshot()
        if source == SOURCE_DEFAULT:
            logger.info("No stored profile, using default profile")
        return profile

    def update(self, data: dict) -> dict:
        body = validate_profile(data)
        body["updated_at"] = utc_now()

        if self.remote is not None:
            # Existence check goes to the API only, never through the fallback chain
            existing = self._fetch_remote()
            if existing:
                profile = self.remote.update(existing["id"], body)
                logger.info(f"Updated profile {existing['id']}")
            else:
                profile = self.remote.create(body)
                logger.info(f"Created profile {profile.get('id')}")
            return profile

        existing = self.local.load()
        if existing:
            profile = {**existing, **body}
        else:
            profile = {**body, "id": new_id()}
        self.local.save(profile)
        logger.info(f"Saved profile {profile['id']} to local store")
        return profile


def build_profile_repository(
    store: LocalStore,
    transport: Optional[TransportClient] = None,
) -> ProfileRepository:
    local = LocalStrategy(store, PROFILE_KEY, "profile", defaults=lambda: DEFAULT_PROFILE)
    remote = RemoteStrategy(transport, "/profile", "profile") if transport else None
    return ProfileRepository(local, remote)
