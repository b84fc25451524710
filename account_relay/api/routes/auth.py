from fastapi import APIRouter, Depends, HTTPException

from account_relay.api.dependencies import get_account_mutator, get_identity_provider
from account_relay.auth.providers.base import IdentityProvider
from account_relay.core.exceptions import AuthError, ConfigurationError
from account_relay.logger import logger
from account_relay.schemas.operations import LoginRequest, LoginResponse
from account_relay.services.account_mutation import AccountMutator

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
    mutator: AccountMutator = Depends(get_account_mutator)
):
    """Log in to the game account and return the ID token with a profile summary."""
    try:
        credential = await identity.sign_in(request.email, request.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ConfigurationError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))

    account = await mutator.login_summary(credential)
    return LoginResponse(
        credential=credential.id_token,
        refreshToken=credential.refresh_token,
        expiresIn=credential.expires_in,
        account=account,
    )
