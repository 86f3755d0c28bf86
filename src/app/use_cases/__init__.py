"""
Use Cases

Organized into domain folders:
- auth/: Login, session extension, logout
"""

from .auth import (
    LoginUseCase,
    ExtendSessionUseCase,
    LogoutUseCase,
)

__all__ = [
    "LoginUseCase",
    "ExtendSessionUseCase",
    "LogoutUseCase",
]
