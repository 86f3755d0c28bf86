from src.api.utils.cookies import clear_refresh_cookie_headers, get_refresh_cookie_options


def test_production_cookie_is_secure_cross_site():
    options = get_refresh_cookie_options(True, 604800, "/api/auth")

    assert options == {
        "httponly": True,
        "secure": True,
        "samesite": "none",
        "max_age": 604800,
        "path": "/api/auth",
    }


def test_development_cookie_is_lax():
    options = get_refresh_cookie_options(False, 3600, "/api/auth")

    assert options["httponly"] is True
    assert options["secure"] is False
    assert options["samesite"] == "lax"
    assert options["max_age"] == 3600


def test_clear_refresh_cookie_headers():
    options = get_refresh_cookie_options(False, 3600, "/api/auth")

    headers = clear_refresh_cookie_headers("refreshToken", options)

    assert headers["set-cookie"].startswith('refreshToken=""')
    assert "Max-Age=0" in headers["set-cookie"]
    assert "Path=/api/auth" in headers["set-cookie"]
