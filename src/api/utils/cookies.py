from fastapi import Response


def get_refresh_cookie_options(is_production: bool, max_age_seconds: int, path: str) -> dict:
    """
    Cookie attributes for the refresh token

    Production needs SameSite=None so the cookie survives cross-site requests,
    which browsers only accept together with Secure.
    """
    return {
        "httponly": True,
        "secure": is_production,
        "samesite": "none" if is_production else "lax",
        "max_age": max_age_seconds,
        "path": path,
    }


def set_refresh_cookie(response: Response, name: str, value: str, options: dict) -> None:
    response.set_cookie(key=name, value=value, **options)


def clear_refresh_cookie(response: Response, name: str, options: dict) -> None:
    response.delete_cookie(
        key=name,
        path=options["path"],
        secure=options["secure"],
        httponly=options["httponly"],
        samesite=options["samesite"],
    )


def clear_refresh_cookie_headers(name: str, options: dict) -> dict:
    """Set-Cookie header that clears the refresh cookie, for error responses"""
    response = Response()
    clear_refresh_cookie(response, name, options)
    return {"set-cookie": response.headers["set-cookie"]}
