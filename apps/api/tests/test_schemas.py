"""
Tests for request payload schemas
"""

from app.schemas.forward import AskRequest, NotesRequest


def test_required_fields_use_wire_names():
    assert AskRequest.required_fields() == ["username", "apiKey", "question"]
    assert NotesRequest.required_fields() == ["username", "apiKey", "notes"]


def test_missing_fields():
    req = AskRequest.model_validate({"username": "u", "question": 0})

    assert req.missing_fields() == ["apiKey", "question"]


def test_non_string_values_pass_presence_check():
    req = AskRequest.model_validate({"username": 12, "apiKey": True, "question": ["why"]})

    assert req.missing_fields() == []


def test_blank_notes_are_missing():
    for blank in ("", 0, False, None):
        req = NotesRequest.model_validate({"username": "u", "apiKey": "k", "notes": blank})
        assert req.missing_fields() == ["notes"]


def test_empty_containers_are_present():
    for empty in ([], {}):
        req = NotesRequest.model_validate({"username": "u", "apiKey": "k", "notes": empty})
        assert req.missing_fields() == []


def test_snake_case_api_key_is_not_accepted():
    req = AskRequest.model_validate({"username": "u", "api_key": "k", "question": "q"})

    assert req.missing_fields() == ["apiKey"]


def test_to_upstream_drops_unknown_keys():
    req = NotesRequest.model_validate({
        "username": "u",
        "apiKey": "k",
        "notes": {"nested": [1, 2]},
        "extra": "ignored",
    })

    assert req.to_upstream() == {"username": "u", "apiKey": "k", "notes": {"nested": [1, 2]}}
