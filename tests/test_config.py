"""Tests for configuration helpers."""

from session_directory.config import parse_allowed_origins


def test_parse_allowed_origins_defaults_to_any() -> None:
    assert parse_allowed_origins(None) == ["*"]
    assert parse_allowed_origins("  ") == ["*"]
    assert parse_allowed_origins("*") == ["*"]


def test_parse_allowed_origins_splits_list() -> None:
    raw = "http://localhost:5173/, https://sessions.example.com ,"

    assert parse_allowed_origins(raw) == [
        "http://localhost:5173",
        "https://sessions.example.com",
    ]
