import re

from services.naming_service import generate_room_code, is_valid_room_code, normalize_room_code


def test_generate_room_code_format():
    for _ in range(200):
        code = generate_room_code()
        assert re.fullmatch(r"[A-Z0-9]{6}", code)


def test_generate_room_code_length():
    assert len(generate_room_code(8)) == 8


def test_is_valid_room_code():
    assert is_valid_room_code("AB12CD")
    assert not is_valid_room_code("ab12cd")
    assert not is_valid_room_code("AB12C")
    assert not is_valid_room_code("AB-2CD")
    assert not is_valid_room_code(None)


def test_normalize_room_code():
    assert normalize_room_code("  ab12cd ") == "AB12CD"
    assert normalize_room_code(None) == ""
