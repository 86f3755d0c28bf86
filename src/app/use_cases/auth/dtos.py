"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Command DTOs
# ============================================================================


class ClientMetadata(BaseModel):
    """Proxy-derived client details recorded on sessions and audit events"""

    ip: Optional[str] = None
    user_agent: Optional[str] = None


class LoginCommand(BaseModel):
    """Login input; emptiness is checked by the use case"""

    username: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    client: ClientMetadata = Field(default_factory=ClientMetadata)


class ExtendSessionCommand(BaseModel):
    """Extend-session context: the refresh secret read from the cookie"""

    refresh_token: Optional[str] = Field(default=None, repr=False)
    client: ClientMetadata = Field(default_factory=ClientMetadata)


class LogoutCommand(BaseModel):
    """Logout context: the refresh secret read from the cookie, if any"""

    refresh_token: Optional[str] = Field(default=None, repr=False)
    client: ClientMetadata = Field(default_factory=ClientMetadata)


# ============================================================================
# Response DTOs
# ============================================================================


class SubjectInfo(BaseModel):
    """Minimal subject descriptor returned on login"""

    id: str
    type: str
    role: str
    email: Optional[str] = None


class LoginResponse(BaseModel):
    """Response for login use case"""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field(default="Bearer", alias="tokenType")
    expires_in: int = Field(alias="expiresIn")
    subject: SubjectInfo
    # Delivered as a cookie by the route, never serialized
    refresh_token: str = Field(exclude=True, repr=False)


class ExtendSessionResponse(BaseModel):
    """Response for extend-session use case"""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field(default="Bearer", alias="tokenType")
    expires_in: int = Field(alias="expiresIn")
    refresh_token: str = Field(exclude=True, repr=False)


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    cleared: bool = True
