"""Supabase Storage adapter."""

from dataclasses import dataclass
from typing import Protocol

from supabase import Client

from camp_registration.adapters.supabase_errors import store_errors


class ObjectStore(Protocol):
    """Interface for binary uploads with public URLs."""

    def upload(
        self, bucket: str, key: str, content: bytes, content_type: str | None
    ) -> None:
        """Store bytes under a key."""

    def get_public_url(self, bucket: str, key: str) -> str:
        """Return the stable public URL for a stored key."""


@dataclass
class SupabaseObjectStore(ObjectStore):
    """Object store backed by Supabase Storage buckets."""

    client: Client

    def upload(
        self, bucket: str, key: str, content: bytes, content_type: str | None
    ) -> None:
        """Upload bytes to a bucket."""
        file_options = {"content-type": content_type} if content_type else None
        with store_errors(f"upload to {bucket}"):
            self.client.storage.from_(bucket).upload(
                path=key, file=content, file_options=file_options
            )

    def get_public_url(self, bucket: str, key: str) -> str:
        """Return the public URL of an object."""
        return self.client.storage.from_(bucket).get_public_url(key)
