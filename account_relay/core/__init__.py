"""
Core building blocks shared by the relay, the remote clients and the
account mutation services.
"""

from account_relay.core.exceptions import (
    AccountRelayError,
    ConfigurationError,
    AuthError,
    FetchError,
    ParseError,
    SaveError,
    NoOpError,
)

__all__ = [
    "AccountRelayError",
    "ConfigurationError",
    "AuthError",
    "FetchError",
    "ParseError",
    "SaveError",
    "NoOpError",
]
