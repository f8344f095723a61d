import os
import stat

import pytest

from credentials import (
    ApiKeyStatus,
    ChainedCredentialProvider,
    CredentialError,
    EnvCredentialProvider,
    FileCredentialStore,
    StaticCredentialProvider,
    configure_api_key,
)


def test_file_store_round_trip(tmp_path):
    store = FileCredentialStore(str(tmp_path / "nested" / "creds.json"))
    assert store.get() is None
    assert store.status() == ApiKeyStatus.UNCONFIGURED

    store.set("  abc123  ")
    assert store.get() == "abc123"
    assert store.status() == ApiKeyStatus.VALID

    store.clear()
    assert store.get() is None


def test_corrupt_store_raises(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CredentialError):
        FileCredentialStore(str(path)).get()


def test_env_provider(monkeypatch):
    monkeypatch.setenv("INTEL_TEST_KEY", " from-env ")
    assert EnvCredentialProvider("INTEL_TEST_KEY").get() == "from-env"
    monkeypatch.delenv("INTEL_TEST_KEY")
    assert EnvCredentialProvider("INTEL_TEST_KEY").get() is None


def test_chain_skips_broken_and_empty_providers(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("[[[", encoding="utf-8")
    chain = ChainedCredentialProvider(
        StaticCredentialProvider(""),
        FileCredentialStore(str(broken)),
        StaticCredentialProvider("fallback"),
    )
    assert chain.get() == "fallback"
    assert ChainedCredentialProvider(StaticCredentialProvider(None)).get() is None


def test_configure_rejects_blank_key(tmp_path):
    store = FileCredentialStore(str(tmp_path / "creds.json"))
    tester_calls = []
    status = configure_api_key(store, "   ", tester_calls.append)
    assert status == ApiKeyStatus.UNCONFIGURED
    assert tester_calls == []


def test_configure_does_not_store_invalid_key(tmp_path):
    store = FileCredentialStore(str(tmp_path / "creds.json"))
    seen = []
    status = configure_api_key(store, "bad", lambda key: False, on_status=seen.append)
    assert status == ApiKeyStatus.INVALID
    assert seen == [ApiKeyStatus.TESTING, ApiKeyStatus.INVALID]
    assert store.get() is None


def test_configure_stores_valid_key(tmp_path):
    store = FileCredentialStore(str(tmp_path / "creds.json"))
    status = configure_api_key(store, "good", lambda key: key == "good")
    assert status == ApiKeyStatus.VALID
    assert store.get() == "good"


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_stored_key_is_private_to_owner(tmp_path):
    store = FileCredentialStore(str(tmp_path / "creds.json"))
    store.set("secret")
    assert stat.S_IMODE(os.stat(store.path).st_mode) & 0o077 == 0


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_existing_readable_store_is_tightened(tmp_path):
    path = tmp_path / "creds.json"
    path.write_text('{"gemini_api_key": "old"}', encoding="utf-8")
    os.chmod(path, 0o644)

    store = FileCredentialStore(str(path))
    store.set("new")
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    os.chmod(path, 0o644)
    store.clear()
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
    assert store.get() is None
