from __future__ import annotations

import pytest

from genremap.core.credential_store import CredentialStore
from genremap.core.storage import MemoryStorage


class FakeClock:
    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store(storage: MemoryStorage, clock: FakeClock) -> CredentialStore:
    return CredentialStore(storage, key="spotify_token", now_fn=clock)
