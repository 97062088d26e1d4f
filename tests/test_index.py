from types import SimpleNamespace

import pytest

from prismagen.index import Index, get_name, model_indexes, to_pascal_case


def _model(unique_indexes=(), primary_key=None):
    return SimpleNamespace(unique_indexes=list(unique_indexes), primary_key=primary_key)


def test_to_pascal_case_camel():
    assert to_pascal_case("userId") == "UserId"


def test_to_pascal_case_acronym():
    assert to_pascal_case("HTTPServer") == "HttpServer"


@pytest.mark.parametrize("text", ["user_id", "user-id", "user id", "UserId", "USER_ID"])
def test_to_pascal_case_separators_agree(text):
    assert to_pascal_case(text) == to_pascal_case("userId")


@pytest.mark.parametrize("text", ["createdAt", "some_long_name", "ABCdef", "field2"])
def test_to_pascal_case_idempotent(text):
    once = to_pascal_case(text)
    assert to_pascal_case(once) == once


def test_get_name_prefers_explicit_name():
    assert get_name("custom", ["a", "b"]) == "custom"


def test_get_name_from_fields():
    assert get_name("", ["user_id", "post_id"]) == "UserIdPostId"


def test_get_name_empty():
    assert get_name("", []) == ""


def test_model_indexes_unique_without_internal_name():
    unique = SimpleNamespace(internal_name="", fields=["Email"])
    assert model_indexes(_model([unique])) == [
        Index(name="Email", internal_name="Email", fields=["Email"])
    ]


def test_model_indexes_unique_with_internal_name():
    unique = SimpleNamespace(internal_name="by_title", fields=["title", "slug"])
    [index] = model_indexes(_model([unique]))
    assert index.name == "by_title"
    assert index.internal_name == "by_title"
    assert index.fields == ["title", "slug"]


def test_model_indexes_compound_primary_key_appended_last():
    unique = SimpleNamespace(internal_name="", fields=["Email"])
    primary_key = SimpleNamespace(name=None, fields=["userId", "postId"])
    indexes = model_indexes(_model([unique], primary_key))
    assert len(indexes) == 2
    last = indexes[-1]
    assert last.fields == ["userId", "postId"]
    assert last.name == last.internal_name
    assert last.internal_name.split("_") == ["userId", "postId"]


def test_model_indexes_empty_primary_key_ignored():
    primary_key = SimpleNamespace(name=None, fields=[])
    assert model_indexes(_model([], primary_key)) == []
    assert model_indexes(_model()) == []