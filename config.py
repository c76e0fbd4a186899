# config.py — env settings, read once and passed into routes

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    supabase_url: str = ""
    supabase_service_key: str = ""
    tmp_dir: str = "/tmp"
    ffmpeg_bin: str = "ffmpeg"
    encode_timeout_sec: int = 600
    scratch_max_age_sec: int = 3600
    clean_interval_sec: int = 600

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            port=_env_int("PORT", 3000),
            supabase_url=os.getenv("SUPABASE_URL", "").strip(),
            supabase_service_key=os.getenv("SUPABASE_SERVICE_KEY", "").strip(),
            tmp_dir=os.getenv("TMP_DIR", "/tmp").strip() or "/tmp",
            ffmpeg_bin=os.getenv("FFMPEG_BIN", "ffmpeg").strip() or "ffmpeg",
            encode_timeout_sec=_env_int("ENCODE_TIMEOUT_SEC", 600),
            scratch_max_age_sec=_env_int("SCRATCH_MAX_AGE_SEC", 3600),
            clean_interval_sec=_env_int("CLEAN_INTERVAL_SEC", 600),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
