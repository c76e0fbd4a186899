# storage.py — Supabase Storage helpers for mask videos

from typing import Optional
from fastapi import Depends
from supabase import create_client, Client

from config import Settings, get_settings

MASK_BUCKET = "Humanlyreal-Mask-Videos"
MASK_CONTENT_TYPE = "video/mp4"

_sb: Optional[Client] = None


class MaskStorage:
    """Uploads into the mask bucket and resolves public links.

    The Supabase client is built on first use, so a bad config surfaces
    from `connect()`/`upload()` inside the caller's error handling.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Client] = None,
                 bucket: str = MASK_BUCKET):
        self.settings = settings
        self._client = client
        self.bucket = bucket

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_client(self.settings or get_settings())
        return self._client

    def connect(self) -> Client:
        return self.client

    def upload(self, key: str, data: bytes, content_type: str = MASK_CONTENT_TYPE):
        # upsert off: an existing key is an error, never overwritten
        return self.client.storage.from_(self.bucket).upload(
            key,
            data,
            file_options={"content-type": content_type, "upsert": "false"},
        )

    def public_url(self, key: str) -> str:
        return self.client.storage.from_(self.bucket).get_public_url(key)


def get_client(settings: Settings) -> Client:
    """Lazy init, one client per process."""
    global _sb
    if _sb:
        return _sb
    if not settings.supabase_configured:
        raise RuntimeError("Supabase is not configured (SUPABASE_URL / SUPABASE_SERVICE_KEY)")
    _sb = create_client(settings.supabase_url, settings.supabase_service_key)
    return _sb


def get_storage(settings: Settings = Depends(get_settings)) -> MaskStorage:
    return MaskStorage(settings)
