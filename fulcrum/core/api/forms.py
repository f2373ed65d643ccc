"""Fulcrum form operations."""
from __future__ import annotations
from typing import Optional

from ..collection import Collection
from ..form import Form
from .client import FulcrumClient


class FormService:
    """Service for reading Fulcrum forms."""

    def __init__(self, client: FulcrumClient):
        """Initialize form service.

        Args:
            client: Configured Fulcrum client
        """
        self.client = client

    def get_forms(self, simple: bool = False) -> Collection[Form]:
        """Return the available forms.

        Args:
            simple: Only fetch basic properties, without the schema

        Returns:
            Collection of Form
        """
        params = {"schema": "false"} if simple else None
        payload = self.client.get_json("/forms", params=params) or {}
        forms = Collection(total_count=payload.get("total_count"))
        for raw in payload.get("forms") or []:
            forms.add(Form(raw, client=self.client))
        return forms

    def get_form(self, form_id: str) -> Optional[Form]:
        """Return a single form with its schema.

        Args:
            form_id: Fulcrum form id

        Returns:
            Form, or None when not found or the response carries no form
        """
        payload = self.client.get_json(f"/forms/{form_id}") or {}
        raw = payload.get("form")
        return Form(raw, client=self.client) if raw else None
