from fastapi import Depends

from account_relay.auth.providers.base import IdentityProvider
from account_relay.auth.providers.firebase import FirebaseIdentity
from account_relay.services.account_mutation import AccountMutator
from account_relay.services.game_backend import GameBackend


def get_identity_provider() -> IdentityProvider:
    """Identity service client (overridden in tests)."""
    return FirebaseIdentity()


def get_game_backend() -> GameBackend:
    """Game backend client (overridden in tests)."""
    return GameBackend()


def get_account_mutator(
    identity: IdentityProvider = Depends(get_identity_provider),
    backend: GameBackend = Depends(get_game_backend),
) -> AccountMutator:
    """Fresh mutator per request; operations share no state."""
    return AccountMutator(identity, backend)
