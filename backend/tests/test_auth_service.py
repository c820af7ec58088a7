from datetime import timedelta

import pytest

from notevault.core.errors import (
    AlreadyExistsError,
    ExpiredTokenError,
    ValidationError,
    WrongCredentialError,
)
from notevault.core.repositories.implementations.memory.credential_repository import (
    InMemoryCredentialRepository,
)
from notevault.core.security.tokens import TokenService
from notevault.core.services.auth_service import AuthService


@pytest.fixture()
def service(clock):
    return AuthService(
        InMemoryCredentialRepository(clock=clock),
        TokenService("service-secret", clock=clock),
        token_ttl=timedelta(hours=1),
    )


@pytest.mark.asyncio
async def test_sign_up_issues_token_for_new_user(service):
    result = await service.sign_up("alice", "secret123")
    assert result.token_type == "bearer"
    assert result.expires_in == 3600
    assert result.user.username == "alice"
    assert service.authenticate(result.token) == result.user


@pytest.mark.asyncio
async def test_sign_in_returns_same_identity(service):
    registered = await service.sign_up("alice", "secret123")
    signed_in = await service.sign_in("alice", "secret123")
    assert signed_in.user.id == registered.user.id


@pytest.mark.asyncio
async def test_sign_up_duplicate(service):
    await service.sign_up("alice", "secret123")
    with pytest.raises(AlreadyExistsError):
        await service.sign_up("alice", "another-pass")


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["short", "password123"])
async def test_sign_up_rejects_weak_passwords(service, password):
    with pytest.raises(ValidationError):
        await service.sign_up("alice", password)


@pytest.mark.asyncio
@pytest.mark.parametrize("username", ["", "   ", " alice"])
async def test_sign_up_rejects_bad_usernames(service, username):
    with pytest.raises(ValidationError):
        await service.sign_up(username, "secret123")


@pytest.mark.asyncio
async def test_unknown_user_and_wrong_password_look_the_same(service):
    await service.sign_up("alice", "secret123")
    with pytest.raises(WrongCredentialError) as wrong_password:
        await service.sign_in("alice", "nope-nope")
    with pytest.raises(WrongCredentialError) as unknown_user:
        await service.sign_in("mallory", "secret123")
    assert wrong_password.value.message == unknown_user.value.message


@pytest.mark.asyncio
async def test_authenticate_rejects_expired_token(service, clock):
    result = await service.sign_up("alice", "secret123")
    clock.advance(hours=1)
    with pytest.raises(ExpiredTokenError):
        service.authenticate(result.token)
