import re

from account_relay.auth.providers.base import AccountInfo, Credential, IdentityProvider
from account_relay.config import settings
from account_relay.core.exceptions import AuthError, ConfigurationError
from account_relay.logger import logger
from account_relay.utils.relay import relay_post

# Identity Toolkit error codes mapped to caller-facing text
AUTH_ERROR_MESSAGES = {
    "EMAIL_NOT_FOUND": "Account not found",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "INVALID_EMAIL": "Invalid email address",
    "USER_DISABLED": "Account is disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts, try again later",
    "INVALID_ID_TOKEN": "Credential is invalid",
    "TOKEN_EXPIRED": "Credential has expired",
    "USER_NOT_FOUND": "Account not found",
}


def _error_code(error_message: str) -> str:
    """Leading upper-case code of an Identity Toolkit message, e.g. 'TOO_MANY_ATTEMPTS_TRY_LATER : ...'."""
    match = re.match(r"[A-Z0-9_]+", error_message)
    return match.group(0) if match else "UNKNOWN"


class FirebaseIdentity(IdentityProvider):
    def __init__(self):
        self.api_key = settings.FIREBASE_API_KEY
        self.base_url = settings.IDENTITY_TOOLKIT_URL.rstrip("/")
        self.timeout = settings.IDENTITY_TIMEOUT

    async def _call(self, endpoint: str, payload: dict, action: str) -> dict:
        if not self.api_key:
            raise ConfigurationError("FIREBASE_API_KEY is not configured")

        data = await relay_post(
            f"{self.base_url}/{endpoint}",
            payload,
            params={"key": self.api_key},
            timeout=self.timeout,
        )
        if data is None:
            raise AuthError(f"{action} failed", reason="identity service unreachable")
        if not isinstance(data, dict):
            raise AuthError(f"{action} failed", reason="unexpected identity service response")

        if "error" in data:
            error = data["error"]
            message = error.get("message", "UNKNOWN") if isinstance(error, dict) else str(error)
            code = _error_code(message)
            logger.info(f"Identity service rejected {action.lower()}: code={code}")
            raise AuthError(AUTH_ERROR_MESSAGES.get(code, f"{action} failed"), reason=code)

        return data

    async def sign_in(self, email: str, password: str) -> Credential:
        data = await self._call(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
            "Login",
        )
        if not data.get("idToken"):
            raise AuthError("Login failed", reason="no idToken in response")

        expires_in = data.get("expiresIn")
        return Credential(
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken"),
            expires_in=int(expires_in) if str(expires_in or "").isdigit() else None,
            account_id=data.get("localId", ""),
            email=data.get("email", email),
        )

    async def lookup_account(self, id_token: str) -> AccountInfo:
        data = await self._call("accounts:lookup", {"idToken": id_token}, "Account lookup")
        users = data.get("users") or []
        if not users:
            raise AuthError("Credential is invalid", reason="no account for token")
        if not isinstance(users, list) or not isinstance(users[0], dict):
            raise AuthError("Credential is invalid", reason="unexpected lookup response")

        user = users[0]
        return AccountInfo(
            account_id=user.get("localId", ""),
            email=user.get("email"),
            verified=bool(user.get("emailVerified", False)),
        )
