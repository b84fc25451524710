from pydantic import BaseModel, Field
from typing import Any, Optional

from account_relay.core.exceptions import AccountRelayError


class AccountCredentials(BaseModel):
    """A reusable ID token, login details, or both (token is tried first)."""
    token: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_login(self) -> bool:
        return bool(self.email and self.password)


class PlayerOverrides(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    money: Optional[int] = Field(None, ge=0)
    coin: Optional[int] = Field(None, ge=0)


class ChangeIdRequest(BaseModel):
    credentials: AccountCredentials
    newId: str = Field(..., min_length=1, max_length=64, description="New local ID")
    overrides: Optional[PlayerOverrides] = None


class CloneAccountRequest(BaseModel):
    source: AccountCredentials
    targetEmail: str = Field(..., min_length=3)
    targetPassword: str = Field(..., min_length=1)
    newId: Optional[str] = Field(None, max_length=64, description="Random ID when empty")


class InspectAccountRequest(BaseModel):
    credentials: AccountCredentials


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class OperationDetails(BaseModel):
    oldId: Optional[str] = None
    newId: Optional[str] = None
    carsUpdated: int = 0
    carsFailed: int = 0
    totalCars: int = 0
    targetEmail: Optional[str] = None  # clone only
    targetAccountId: Optional[str] = None  # clone only


class AccountSummary(BaseModel):
    accountId: Optional[str] = None
    email: Optional[str] = None
    localID: Optional[str] = None
    cleanId: Optional[str] = None
    name: Optional[str] = None
    money: Any = None
    coin: Any = None
    totalCars: int = 0


class OperationResult(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None
    details: Optional[OperationDetails] = None
    account: Optional[AccountSummary] = None
    status_code: int = Field(200, exclude=True)

    @classmethod
    def from_error(cls, error: AccountRelayError) -> "OperationResult":
        return cls(
            success=False,
            message=str(error),
            error=error.code,
            status_code=error.status_code,
        )


class LoginResponse(BaseModel):
    credential: str
    refreshToken: Optional[str] = None
    expiresIn: Optional[int] = None
    account: AccountSummary
