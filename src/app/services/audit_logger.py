"""
Auth Audit Logger

Writes security-relevant outcomes to the audit log. Injected into every use
case; nothing here reads module state.

Never pass passwords or raw tokens in; token material is logged only as a
fingerprint (see token_issuer.token_fingerprint).
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

AUDIT_LOGGER_NAME = "hrms_auth.audit"

SEVERITY_LEVELS = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
}


class AuthAuditLogger:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def auth_event(
        self,
        action: str,
        success: bool,
        subject_id: Optional[UUID] = None,
        login_id: Optional[str] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
        role: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        """
        Record one authentication outcome.

        Args:
            action: LOGIN, TOKEN_REFRESH, LOGOUT
            success: Outcome
            subject_id: Actor id when known
            login_id: Identifier the client presented
            ip: Client IP
            user_agent: Client user agent
            role: Role of the actor when known
            reason: Internal failure reason, never shown to clients
        """
        record = {
            "action": action,
            "outcome": "success" if success else "failure",
            "subject_id": str(subject_id) if subject_id else None,
            "login_id": login_id,
            "ip": ip,
            "user_agent": user_agent,
            "role": role,
            "reason": reason,
        }
        level = logging.INFO if success else logging.WARNING
        self.logger.log(level, f"AUTH {_format(record)}", extra={"audit": record})

    def security_event(
        self,
        event: str,
        severity: str,
        details: Optional[Dict[str, Any]] = None,
        ip: Optional[str] = None,
        subject_id: Optional[UUID] = None,
    ) -> None:
        record = {
            "event": event,
            "severity": severity,
            "subject_id": str(subject_id) if subject_id else None,
            "ip": ip,
            **(details or {}),
        }
        level = SEVERITY_LEVELS.get(severity, logging.WARNING)
        self.logger.log(level, f"SECURITY {_format(record)}", extra={"audit": record})


def _format(record: Dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in record.items() if value is not None)
