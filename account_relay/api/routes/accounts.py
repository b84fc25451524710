"""
Account mutation routes.

Every route answers with an OperationResult. Failed operations keep the
same body shape and use the HTTP status of the error that stopped them
(400 no-op, 401 auth, 502 remote fetch/save failures).
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from account_relay.api.dependencies import get_account_mutator
from account_relay.schemas.operations import (
    ChangeIdRequest,
    CloneAccountRequest,
    InspectAccountRequest,
    OperationResult,
)
from account_relay.services.account_mutation import AccountMutator

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _respond(result: OperationResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.model_dump())


@router.post("/change-id", response_model=OperationResult)
async def change_id(
    request: ChangeIdRequest,
    mutator: AccountMutator = Depends(get_account_mutator)
):
    """
    Change the account's local ID.

    Rewrites the ID in the player record and in every owned car. Car save
    failures are reported in details.carsFailed and do not fail the call.
    """
    result = await mutator.change_identifier(request.credentials, request.newId, request.overrides)
    return _respond(result)


@router.post("/clone", response_model=OperationResult)
async def clone_account(
    request: CloneAccountRequest,
    mutator: AccountMutator = Depends(get_account_mutator)
):
    """
    Clone the source account into the target account.

    The target gets `newId` as local ID, or a random one when omitted.
    """
    result = await mutator.clone_account(
        request.source,
        request.targetEmail,
        request.targetPassword,
        request.newId,
    )
    return _respond(result)


@router.post("/inspect", response_model=OperationResult)
async def inspect_account(
    request: InspectAccountRequest,
    mutator: AccountMutator = Depends(get_account_mutator)
):
    """Read the account's player summary and car count."""
    result = await mutator.inspect_account(request.credentials)
    return _respond(result)
