from account_relay.schemas.records import PlayerRecord, VehicleRecord
from account_relay.schemas.operations import (
    AccountCredentials, PlayerOverrides,
    ChangeIdRequest, CloneAccountRequest, InspectAccountRequest, LoginRequest,
    OperationDetails, AccountSummary, OperationResult, LoginResponse
)

__all__ = [
    "PlayerRecord", "VehicleRecord",
    "AccountCredentials", "PlayerOverrides",
    "ChangeIdRequest", "CloneAccountRequest", "InspectAccountRequest", "LoginRequest",
    "OperationDetails", "AccountSummary", "OperationResult", "LoginResponse"
]
