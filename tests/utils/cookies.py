import re
from typing import Optional

REFRESH_COOKIE = "refreshToken"


def refresh_cookie(response, name: str = REFRESH_COOKIE) -> Optional[str]:
    """Value of the refresh cookie set by a response"""
    for header in response.headers.get_list("set-cookie"):
        match = re.match(rf'{re.escape(name)}="?([^";]*)"?', header)
        if match:
            return match.group(1)
    return None


def refresh_cookie_header(response, name: str = REFRESH_COOKIE) -> Optional[str]:
    for header in response.headers.get_list("set-cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def cookie_header(token: str, name: str = REFRESH_COOKIE) -> dict:
    return {"Cookie": f"{name}={token}"}
