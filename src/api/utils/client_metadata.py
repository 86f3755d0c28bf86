from typing import Mapping, Optional

from src.app.use_cases.auth.dtos import ClientMetadata


def get_client_metadata(
    headers: Mapping[str, str], fallback_ip: Optional[str] = None
) -> ClientMetadata:
    """
    Extract client IP and user agent from request headers

    The first non-empty entry of X-Forwarded-For wins over the socket address.
    Empty values are normalised to None.
    """
    lowered = {key.lower(): value for key, value in headers.items()}

    ip = None
    forwarded = lowered.get("x-forwarded-for")
    if forwarded:
        for candidate in forwarded.split(","):
            candidate = candidate.strip()
            if candidate:
                ip = candidate
                break
    if ip is None:
        ip = fallback_ip or None

    user_agent = lowered.get("user-agent") or None

    return ClientMetadata(ip=ip, user_agent=user_agent)
