"""Supabase Auth adapter."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import Client
from supabase_auth.errors import AuthApiError, AuthRetryableError

from camp_registration.adapters.supabase_errors import store_errors
from camp_registration.domain.models import Principal
from camp_registration.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Interface for resolving and managing authenticated principals."""

    def get_current_principal(self, access_token: str | None) -> Principal | None:
        """Return the principal for an access token, or None."""

    def sign_in_url(self, provider: str, redirect_to: str) -> str:
        """Return the OAuth authorization URL for a provider."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity provider backed by Supabase Auth."""

    client: Client

    def get_current_principal(self, access_token: str | None) -> Principal | None:
        """Verify an access token with Supabase Auth."""
        if not access_token:
            return None
        try:
            with store_errors("get_user"):
                response = self.client.auth.get_user(access_token)
        except AuthApiError as exc:
            logger.info("Rejected access token: %s", exc.message)
            return None
        except AuthRetryableError as exc:
            logger.error("Supabase get_user failed: %s", exc.message)
            raise StoreUnavailable from exc
        if response is None or response.user is None:
            return None
        return Principal(id=UUID(response.user.id), email=response.user.email)

    def sign_in_url(self, provider: str, redirect_to: str) -> str:
        """Build the provider redirect for an OAuth sign-in."""
        response = self.client.auth.sign_in_with_oauth(
            {"provider": provider, "options": {"redirect_to": redirect_to}}
        )
        return response.url

    def sign_out(self, access_token: str) -> None:
        """Sign the session out globally."""
        with store_errors("sign_out"):
            self.client.auth.admin.sign_out(access_token)
