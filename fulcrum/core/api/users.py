"""Fulcrum user operations."""
from __future__ import annotations

from ..collection import Collection
from ..models import User
from .client import FulcrumClient


class UserService:
    """Service for listing Fulcrum users."""

    def __init__(self, client: FulcrumClient):
        """Initialize user service.

        Args:
            client: Configured Fulcrum client
        """
        self.client = client

    def get_users(self) -> Collection[User]:
        """Return the users visible to the API token.

        Returns:
            Collection of User (empty when the API returned nothing usable)
        """
        payload = self.client.get_json("/users") or {}
        users = Collection(total_count=payload.get("total_count"))
        for raw in payload.get("users") or []:
            users.add(User(raw, client=self.client))
        return users
