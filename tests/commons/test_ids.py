import re
from uuid import UUID

from portfolio.commons.ids import new_id, new_id_str, new_token, parse_id


def test_new_id_is_random_uuid4() -> None:
    a, b = new_id(), new_id()
    assert a != b
    assert a.version == 4


def test_new_id_str_parses_back() -> None:
    assert isinstance(UUID(new_id_str()), UUID)


def test_new_token_is_64_lowercase_hex() -> None:
    token = new_token()
    assert re.fullmatch(r"[0-9a-f]{64}", token)
    assert token != new_token()


def test_parse_id_tolerates_garbage() -> None:
    value = new_id()
    assert parse_id(value) == value
    assert parse_id(str(value)) == value
    assert parse_id("not-a-uuid") is None
    assert parse_id(None) is None
    assert parse_id(42) is None
