from app.db.types import decode_list
from app.services.content import normalize_list, parse_json_list, parse_year, resolve_id
from app.core.errors import NotFoundError, ValidationFailedError

import pytest


def test_decode_list():
    assert decode_list(None) == []
    assert decode_list("") == []
    assert decode_list('["a", "b"]') == ["a", "b"]
    assert decode_list(("a",)) == ["a"]
    assert decode_list('{"a": 1}') == []
    assert decode_list("[broken") == []


def test_normalize_list_only_accepts_arrays():
    assert normalize_list("Alice, Bob") == []
    assert normalize_list(' ["Alice"]') == ["Alice"]
    assert normalize_list(["x"]) == ["x"]


def test_parse_json_list_is_strict():
    assert parse_json_list(None, "expertises") == []
    assert parse_json_list("  ", "expertises") == []
    assert parse_json_list('["MRI"]', "expertises") == ["MRI"]
    with pytest.raises(ValidationFailedError):
        parse_json_list('"MRI"', "expertises")
    with pytest.raises(ValidationFailedError):
        parse_json_list("MRI", "expertises")


def test_parse_year():
    assert parse_year("2023") == 2023
    assert parse_year(" 2023 ") == 2023
    assert parse_year("twenty") is None
    assert parse_year("") is None
    assert parse_year(None) is None


def test_resolve_id_rejects_garbage():
    with pytest.raises(NotFoundError) as exc:
        resolve_id("123", "Thesis")
    assert exc.value.message == "Thesis not found"
