"""Unit tests for the user directory."""
from __future__ import annotations

import pytest

from laurier_connect.errors import InvalidInputError, NotFoundError
from laurier_connect.models import User
from laurier_connect.services import SAMPLE_STUDENTS, UserDirectory


@pytest.fixture
def directory() -> UserDirectory:
    directory = UserDirectory()
    directory.seed()
    return directory


def test_seed_adds_sample_students_once(directory: UserDirectory) -> None:
    assert [user.id for user in directory.all()] == [record[0] for record in SAMPLE_STUDENTS]
    assert directory.seed() == []


@pytest.mark.parametrize(
    "field, query, expected",
    [
        ("name", "EMMA", ["200512345"]),
        ("name", "mi", ["200578934", "200598765"]),
        ("id", "2005", ["200578934", "200512345", "200598765"]),
        ("id", "98765", ["200598765"]),
        ("major", "psych", ["200598765"]),
        ("email", "WILS", ["200512345"]),
    ],
)
def test_search_is_case_insensitive_substring_in_directory_order(directory, field, query, expected) -> None:
    assert [user.id for user in directory.search(query, field)] == expected


def test_empty_query_returns_everyone(directory: UserDirectory) -> None:
    assert len(directory.by_name("")) == 3
    assert len(directory.by_major("   ")) == 3
    assert directory.by_email("nobody") == []


def test_unknown_search_field_rejected(directory: UserDirectory) -> None:
    with pytest.raises(InvalidInputError):
        directory.search("x", "phone")  # type: ignore[arg-type]


def test_register_requires_institution_email() -> None:
    directory = UserDirectory(email_suffix="@mylaurier.ca")
    with pytest.raises(InvalidInputError):
        directory.register(email="someone@gmail.com", full_name="Some One", major="Math")
    with pytest.raises(InvalidInputError):
        directory.register(email="", full_name="Some One", major="Math")

    user = directory.register(email=" Test0001@MyLaurier.ca ", full_name="  Test User ", major="Undeclared")
    assert user.email == "test0001@mylaurier.ca"
    assert user.full_name == "Test User"
    assert directory.find_by_email("TEST0001@mylaurier.ca") is user


@pytest.mark.parametrize(
    "email",
    ["@mylaurier.ca", "two@@mylaurier.ca", "spaced out@mylaurier.ca", "dots..twice@mylaurier.ca", "x@mylaurier"],
)
def test_register_rejects_malformed_addresses(email: str) -> None:
    directory = UserDirectory(email_suffix="@mylaurier.ca")
    with pytest.raises(InvalidInputError):
        directory.register(email=email, full_name="Some One", major="Math")
    assert directory.all() == []


def test_register_rejects_blank_fields_and_duplicates(directory: UserDirectory) -> None:
    with pytest.raises(InvalidInputError):
        directory.register(email="new1@mylaurier.ca", full_name="  ", major="Math")
    with pytest.raises(InvalidInputError):
        directory.register(email="new1@mylaurier.ca", full_name="New", major="")
    with pytest.raises(InvalidInputError):
        directory.register(email="smit2090@mylaurier.ca", full_name="Another John", major="Art")


def test_get_unknown_user_raises_not_found(directory: UserDirectory) -> None:
    with pytest.raises(NotFoundError):
        directory.get("missing")


def test_identity_is_by_id_only() -> None:
    first = User(id="1", full_name="A", email="a@mylaurier.ca", major="X")
    renamed = User(id="1", full_name="B", email="b@mylaurier.ca", major="Y")
    assert first == renamed
    assert len({first, renamed}) == 1


def test_update_profile_and_avatar(directory: UserDirectory) -> None:
    user = directory.update_profile("200512345", major=" Economics ")
    assert user.major == "Economics"
    assert user.full_name == "Emma Wilson"

    with pytest.raises(InvalidInputError):
        directory.update_profile("200512345", full_name="")

    directory.update_avatar("200512345", b"\x89PNG")
    assert directory.get("200512345").avatar == b"\x89PNG"
    with pytest.raises(InvalidInputError):
        directory.update_avatar("200512345", b"")
