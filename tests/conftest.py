"""
Pytest fixtures and configuration for account_relay tests.

Provides:
- In-memory fakes for the identity service and the game backend
- AccountMutator wired to the fakes (no pacing delay)
- Test client with the fakes injected through dependency overrides
- A seeded account matching the documented change-ID scenario
"""

import copy

import pytest
from fastapi.testclient import TestClient

from account_relay.main import app
from account_relay.api.dependencies import get_game_backend, get_identity_provider
from account_relay.auth.providers.base import AccountInfo, Credential, IdentityProvider
from account_relay.core.exceptions import AuthError, FetchError, SaveError
from account_relay.services.account_mutation import AccountMutator


# ============================================================
# Fakes
# ============================================================

class FakeIdentity(IdentityProvider):
    """Identity service keeping tokens and logins in dicts."""

    def __init__(self):
        self.tokens: dict[str, AccountInfo] = {}
        self.logins: dict[tuple[str, str], Credential] = {}
        self.sign_in_calls: list[str] = []
        self.lookup_calls: list[str] = []

    def add_account(self, account_id, email, password, token):
        self.tokens[token] = AccountInfo(account_id=account_id, email=email, verified=True)
        self.logins[(email, password)] = Credential(
            id_token=token,
            refresh_token=f"refresh-{token}",
            expires_in=3600,
            account_id=account_id,
            email=email,
        )

    async def sign_in(self, email, password):
        self.sign_in_calls.append(email)
        credential = self.logins.get((email, password))
        if credential is None:
            raise AuthError("Invalid email or password", reason="INVALID_LOGIN_CREDENTIALS")
        return credential

    async def lookup_account(self, id_token):
        self.lookup_calls.append(id_token)
        account = self.tokens.get(id_token)
        if account is None:
            raise AuthError("Credential is invalid", reason="INVALID_ID_TOKEN")
        return account


class FakeGameBackend:
    """Game backend keyed by ID token, recording every save."""

    def __init__(self):
        self.players: dict[str, dict] = {}
        self.vehicles: dict[str, list] = {}
        self.failing_car_ids: set[str] = set()
        self.fail_player_save = False
        self.saved_players: list[tuple[str, dict]] = []
        self.saved_vehicles: list[tuple[str, dict]] = []

    @property
    def save_count(self):
        return len(self.saved_players) + len(self.saved_vehicles)

    async def fetch_player_record(self, id_token):
        if id_token not in self.players:
            raise FetchError("Could not fetch player record", reason="no response")
        return copy.deepcopy(self.players[id_token])

    async def fetch_vehicle_list(self, id_token):
        if id_token not in self.vehicles:
            raise FetchError("Could not fetch vehicle list", reason="no response")
        return copy.deepcopy(self.vehicles[id_token])

    async def save_player_record(self, id_token, record):
        if self.fail_player_save:
            raise SaveError("Player record save was not acknowledged", reason="0")
        self.saved_players.append((id_token, record))

    async def save_vehicle(self, id_token, vehicle):
        if vehicle.get("CarID") in self.failing_car_ids:
            raise SaveError("Vehicle save was not acknowledged", reason="0")
        self.saved_vehicles.append((id_token, vehicle))


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def backend():
    return FakeGameBackend()


@pytest.fixture
def mutator(identity, backend):
    """Mutator on the fakes; batches of 2 and no delay between batches."""
    return AccountMutator(identity, backend, batch_size=2, save_delay=0)


@pytest.fixture
def seeded_account(identity, backend):
    """Player ABC123 with two cars, reachable by token or by login."""
    identity.add_account("uid-source", "player@example.com", "secret", "good-token")
    backend.players["good-token"] = {"localID": "ABC123", "money": 500}
    backend.vehicles["good-token"] = [{"CarID": "ABC123-1"}, {"CarID": "ABC123-2"}]
    return {"token": "good-token", "email": "player@example.com", "password": "secret"}


@pytest.fixture
def target_account(identity, backend):
    """Empty target account for clone tests."""
    identity.add_account("uid-target", "target@example.com", "target-pw", "target-token")
    return {"email": "target@example.com", "password": "target-pw", "token": "target-token"}


@pytest.fixture
def client(identity, backend):
    """Test client with fakes injected; overrides cleared afterwards."""
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_game_backend] = lambda: backend

    yield TestClient(app)

    app.dependency_overrides.clear()
