from abc import ABC, abstractmethod
from dataclasses import dataclass

@dataclass
class Credential:
    id_token: str
    refresh_token: str | None
    expires_in: int | None  # seconds
    account_id: str  # identity service user ID
    email: str | None

@dataclass
class AccountInfo:
    account_id: str
    email: str | None
    verified: bool

class IdentityProvider(ABC):
    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Credential:
        """Log in with email/password; raises AuthError when rejected."""
        ...

    @abstractmethod
    async def lookup_account(self, id_token: str) -> AccountInfo:
        """Probe a token; raises AuthError when it is not accepted."""
        ...
