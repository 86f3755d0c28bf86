"""
Authentication error codes.

Clients see only these codes and messages. Causes sharing one code (unknown
user, inactive account, wrong password) are told apart only in the audit log.
"""

from enum import Enum

from libs.result import Error


class AuthErrorCode(str, Enum):
    MISSING_CREDENTIALS = "AUTH_MISSING_CREDENTIALS"
    INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    REFRESH_MISSING = "AUTH_REFRESH_MISSING"
    REFRESH_INVALID = "AUTH_REFRESH_INVALID"
    PERSISTENCE_ERROR = "INTERNAL_ERROR"


MISSING_CREDENTIALS = Error(
    AuthErrorCode.MISSING_CREDENTIALS.value, "Username and password are required"
)
INVALID_CREDENTIALS = Error(
    AuthErrorCode.INVALID_CREDENTIALS.value, "Invalid username or password"
)
REFRESH_MISSING = Error(AuthErrorCode.REFRESH_MISSING.value, "Refresh token missing")
REFRESH_INVALID = Error(AuthErrorCode.REFRESH_INVALID.value, "Invalid or expired session")
PERSISTENCE_ERROR = Error(AuthErrorCode.PERSISTENCE_ERROR.value, "Internal server error")
