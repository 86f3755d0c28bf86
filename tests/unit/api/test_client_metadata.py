from src.api.utils.client_metadata import get_client_metadata


def test_first_forwarded_entry_wins():
    meta = get_client_metadata(
        {"X-Forwarded-For": " 198.51.100.4 , 10.0.0.1", "User-Agent": "Mozilla/5.0"},
        "127.0.0.1",
    )

    assert meta.ip == "198.51.100.4"
    assert meta.user_agent == "Mozilla/5.0"


def test_empty_forwarded_entries_are_skipped():
    meta = get_client_metadata({"x-forwarded-for": " , ,203.0.113.9"}, "127.0.0.1")

    assert meta.ip == "203.0.113.9"


def test_falls_back_to_socket_address():
    assert get_client_metadata({}, "127.0.0.1").ip == "127.0.0.1"
    assert get_client_metadata({"x-forwarded-for": " , "}, "127.0.0.1").ip == "127.0.0.1"


def test_nothing_known():
    meta = get_client_metadata({"user-agent": ""}, None)

    assert meta.ip is None
    assert meta.user_agent is None
