"""Shared fixtures: headless Qt plus fake player/renderer collaborators."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest


class FakePlayer:
    """In-memory stand-in for the media player collaborator."""

    def __init__(self, position: int = 0, looping: bool = False, syncing: bool = False):
        self.position = position
        self.playing = False
        self.looping = looping
        self.syncing = syncing
        self.path: str | None = "/media/movie.mp4"
        self.calls: list[tuple] = []

    def jump(self, ms: int) -> None:
        self.calls.append(("jump", ms))
        self.position = ms

    def pause(self) -> None:
        self.calls.append(("pause",))
        self.playing = False

    def unpause(self) -> None:
        self.calls.append(("unpause",))
        self.playing = True

    def is_looping_current_entry(self) -> bool:
        return self.looping

    def set_looping(self, enabled: bool) -> None:
        self.looping = enabled

    def is_syncing_position(self) -> bool:
        return self.syncing

    def set_syncing(self, enabled: bool) -> None:
        self.syncing = enabled

    def media_path(self) -> str | None:
        return self.path


class FakeJob:
    def __init__(self, request, on_result, on_failed):
        self.request = request
        self.on_result = on_result
        self.on_failed = on_failed
        self.cancelled = False

    def kill(self) -> None:
        self.cancelled = True

    def deliver(self, data: bytes = b"\x89PNG fake") -> None:
        self.on_result(self.request, data)

    def fail(self, message: str = "boom") -> None:
        if self.on_failed is not None:
            self.on_failed(self.request, message)


class FakeRenderer:
    """Records render requests instead of starting ffmpeg."""

    def __init__(self):
        self.jobs: list[FakeJob] = []

    def start_async(self, request, on_result, on_failed=None) -> FakeJob:
        job = FakeJob(request, on_result, on_failed)
        self.jobs.append(job)
        return job

    def wait_for_done(self, msecs: int = -1) -> bool:
        return True


@pytest.fixture
def fake_player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()
