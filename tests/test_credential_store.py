import json

from genremap.core.credential_store import CredentialStore
from genremap.core.storage import MemoryStorage
from genremap.models.credential import Credential


def test_save_and_load(store: CredentialStore, clock) -> None:
    credential = Credential(access_token="token-1", expires_at=clock() + 60_000)
    store.save(credential)
    assert store.load() == credential


def test_save_writes_expected_record(store: CredentialStore, storage: MemoryStorage) -> None:
    store.save(Credential(access_token="token-1", expires_at=123_456))
    assert json.loads(storage.get("spotify_token")) == {
        "accessToken": "token-1",
        "expiresAt": 123_456,
    }


def test_save_overwrites(store: CredentialStore, clock) -> None:
    store.save(Credential(access_token="old", expires_at=clock() + 60_000))
    store.save(Credential(access_token="new", expires_at=clock() + 60_000))
    loaded = store.load()
    assert loaded is not None
    assert loaded.access_token == "new"


def test_load_missing_returns_none(store: CredentialStore) -> None:
    assert store.load() is None


def test_expired_credential_is_purged(store: CredentialStore, storage: MemoryStorage, clock) -> None:
    store.save(Credential(access_token="token-1", expires_at=clock() + 10_000))
    clock.advance(10)
    assert store.load() is None
    assert storage.get("spotify_token") is None
    assert store.load() is None


def test_malformed_records_are_purged(storage: MemoryStorage, store: CredentialStore) -> None:
    for raw in (
        "not json",
        json.dumps({"accessToken": "abc"}),
        json.dumps({"expiresAt": 99_999_999_999_999}),
        json.dumps(["abc", 1]),
        json.dumps({"accessToken": "abc", "expiresAt": "tomorrow"}),
    ):
        storage.set("spotify_token", raw)
        assert store.load() is None
        assert storage.get("spotify_token") is None


def test_clear(store: CredentialStore, storage: MemoryStorage, clock) -> None:
    store.save(Credential(access_token="token-1", expires_at=clock() + 60_000))
    store.clear()
    assert storage.get("spotify_token") is None
    store.clear()
