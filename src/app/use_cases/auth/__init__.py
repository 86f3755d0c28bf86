"""
Authentication Use Cases

Login, session extension and logout.
"""

from .login_use_case import LoginUseCase
from .extend_session_use_case import ExtendSessionUseCase
from .logout_use_case import LogoutUseCase
from .errors import AuthErrorCode
from .dtos import (
    ClientMetadata,
    LoginCommand,
    ExtendSessionCommand,
    LogoutCommand,
    LoginResponse,
    ExtendSessionResponse,
    LogoutResponse,
    SubjectInfo,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "ExtendSessionUseCase",
    "LogoutUseCase",
    # Errors
    "AuthErrorCode",
    # DTOs - Commands
    "ClientMetadata",
    "LoginCommand",
    "ExtendSessionCommand",
    "LogoutCommand",
    # DTOs - Responses
    "LoginResponse",
    "ExtendSessionResponse",
    "LogoutResponse",
    # DTOs - Nested Models
    "SubjectInfo",
]
