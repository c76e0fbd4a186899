"""Pytest fixtures for the mask video service."""

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import main
from config import Settings, get_settings
from storage import MASK_BUCKET, get_storage

FAKE_MP4 = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 2048


class FakeStorage:
    """Records uploads and hands out Supabase-shaped public URLs."""

    def __init__(self, bucket: str = MASK_BUCKET):
        self.bucket = bucket
        self.uploads = {}
        self.fail_with = None
        self.connect_error = None

    def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        return self

    def upload(self, key: str, data: bytes, content_type: str = "video/mp4"):
        if self.fail_with is not None:
            raise self.fail_with
        if key in self.uploads:
            raise RuntimeError("The resource already exists")
        self.uploads[key] = (data, content_type)
        return {"Key": f"{self.bucket}/{key}"}

    def public_url(self, key: str) -> str:
        return f"https://test.supabase.co/storage/v1/object/public/{self.bucket}/{key}"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(tmp_dir=str(tmp_path), encode_timeout_sec=5)


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def render_calls(monkeypatch):
    """Replace ffmpeg with a writer of FAKE_MP4; returns the list of calls."""
    calls = []

    async def fake_render(req, out_path, ffmpeg_bin="ffmpeg", timeout=600):
        calls.append((req, out_path))
        with open(out_path, "wb") as f:
            f.write(FAKE_MP4)

    monkeypatch.setattr(main, "render_mask_video", fake_render)
    return calls


@pytest.fixture
def client(settings: Settings, fake_storage: FakeStorage):
    main.app.dependency_overrides[get_settings] = lambda: settings
    main.app.dependency_overrides[get_storage] = lambda: fake_storage
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def valid_body() -> dict:
    return {
        "video_width": 640,
        "video_height": 480,
        "video_duration_sec": 2,
        "mask_y_start": 100,
        "mask_y_end": 300,
    }


def scratch_files(tmp_dir: str):
    return [n for n in os.listdir(tmp_dir) if n.startswith("mask_")]
