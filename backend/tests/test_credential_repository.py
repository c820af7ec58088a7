"""Credential store: registration, login and racing registrations."""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from notevault.core.errors import AlreadyExistsError, NotFoundError, WrongCredentialError
from notevault.core.repositories.implementations.memory.credential_repository import (
    InMemoryCredentialRepository,
)


@pytest.fixture()
def store(clock):
    return InMemoryCredentialRepository(clock=clock)


def test_register_creates_identity(store, clock):
    identity = store.register("alice", "secret123")
    assert identity.username == "alice"
    assert re.fullmatch(r"[0-9a-f]{16}", identity.id)
    assert identity.created_at == clock()
    assert identity.password_hash != "secret123"
    assert identity.salt
    assert store.count() == 1


def test_register_twice_keeps_first_identity(store):
    first = store.register("alice", "secret123")
    with pytest.raises(AlreadyExistsError):
        store.register("alice", "different-password")

    again = store.login("alice", "secret123")
    assert again.id == first.id
    assert again.password_hash == first.password_hash
    with pytest.raises(WrongCredentialError):
        store.login("alice", "different-password")


def test_usernames_are_case_sensitive(store):
    lower = store.register("alice", "secret123")
    upper = store.register("Alice", "secret123")
    assert lower.id != upper.id


def test_login_returns_registered_identity(store):
    registered = store.register("alice", "secret123")
    logged_in = store.login("alice", "secret123")
    assert logged_in == registered


def test_login_wrong_password(store):
    store.register("alice", "secret123")
    with pytest.raises(WrongCredentialError):
        store.login("alice", "secret1234")


def test_login_unknown_user(store):
    with pytest.raises(NotFoundError):
        store.login("nobody", "secret123")


def test_returned_identity_is_a_copy(store):
    identity = store.register("alice", "secret123")
    identity.password_hash = "tampered"
    assert store.login("alice", "secret123").password_hash != "tampered"


def test_concurrent_registration_of_same_username(store):
    def attempt(i):
        try:
            return store.register("racer", f"password-{i}")
        except AlreadyExistsError:
            return None

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(attempt, range(64)))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1
    assert store.count() == 1
    assert store.login("racer", "password-" + str(results.index(winners[0]))).id == winners[0].id
