"""
Custom exceptions for the account relay.

Every failure that ends an account operation early is raised as one of
these exceptions and turned into a failed OperationResult at the
operation boundary. Vehicle-level save failures are NOT raised past the
vehicle loop: they are counted in the result instead.

Exception Hierarchy:
    AccountRelayError (base)
    ├── ConfigurationError - Required setting missing (e.g. API key)
    ├── AuthError - Credential missing/invalid or login rejected
    ├── FetchError - Game backend returned no usable payload
    │   └── ParseError - Payload could not be decoded as JSON
    ├── SaveError - Save was not acknowledged by the game backend
    └── NoOpError - Requested identifier equals the current one
"""

from typing import Optional


class AccountRelayError(Exception):
    """
    Base exception for all account relay errors.

    Attributes:
        message: Human-readable error description
        reason: Optional backend-specific error code or text
        code: Machine-readable error code reported in OperationResult.error
        status_code: HTTP status used when the error reaches the API
    """

    code = "ERROR"
    status_code = 500

    def __init__(self, message: str, reason: Optional[str] = None):
        self.message = message
        self.reason = reason

        if reason:
            full_message = f"{message} ({reason})"
        else:
            full_message = message

        super().__init__(full_message)


class ConfigurationError(AccountRelayError):
    """
    Raised when a required setting is missing.

    Example:
        >>> await FirebaseIdentity().sign_in("a@b.c", "pw")  # no FIREBASE_API_KEY
        ConfigurationError: FIREBASE_API_KEY is not configured
    """

    code = "CONFIGURATION_ERROR"
    status_code = 500


class AuthError(AccountRelayError):
    """
    Raised when no usable credential can be obtained.

    This typically occurs when:
    - Neither a token nor email/password were supplied
    - The supplied token failed the probe and no login details were given
    - The identity service rejected the login (bad password, unknown
      account, disabled account, rate limit)

    The identity service's error code is kept in `reason`.
    """

    code = "AUTH_ERROR"
    status_code = 401


class FetchError(AccountRelayError):
    """
    Raised when the game backend returns no usable player or vehicle payload.

    Fatal for the player record. The vehicle list fetch catches it and
    continues with zero vehicles.
    """

    code = "FETCH_ERROR"
    status_code = 502


class ParseError(FetchError):
    """Raised when a fetched payload is not decodable JSON."""

    code = "PARSE_ERROR"


class SaveError(AccountRelayError):
    """
    Raised when the game backend does not acknowledge a save.

    Fatal for the player record; counted as a failed vehicle otherwise.
    """

    code = "SAVE_ERROR"
    status_code = 502


class NoOpError(AccountRelayError):
    """Raised when the requested identifier already is the current one."""

    code = "NO_OP"
    status_code = 400
