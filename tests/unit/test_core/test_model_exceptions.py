"""Tests for core exceptions."""

import inspect

from graphql import GraphQLError, Source, parse
from graphql.error import GraphQLSyntaxError

from graphql_mashup.core import exceptions as exc


def _syntax_error() -> GraphQLSyntaxError:
    try:
        parse("{ ping ")
    except GraphQLSyntaxError as error:
        return error
    raise AssertionError("expected a syntax error")


def test_model_error_defaults() -> None:
    error = exc.GraphQLModelError("boom")
    assert error.type == "about:blank"
    assert error.details == []
    assert error.extra == {}
    assert str(error) == "boom"


def test_schema_composition_error_type() -> None:
    error = exc.SchemaCompositionError("Invalid GraphQL schema", errors=["Unknown type \"Foo\"."])
    assert error.type == "schema-composition"
    assert error.details == [{"message": 'Unknown type "Foo".'}]


def test_request_error_defaults_to_malformed_query() -> None:
    error = exc.RequestError("Invalid GraphQL query")
    assert error.type == exc.RequestError.MALFORMED_QUERY == "malformed-query"


def test_request_error_custom_type() -> None:
    error = exc.RequestError("Missing GraphQL query", type=exc.RequestError.MISSING_QUERY)
    assert error.to_dict() == {
        "message": "Missing GraphQL query",
        "type": "missing-query",
        "details": [],
    }


def test_graphql_error_detail_keeps_locations() -> None:
    detail = exc.format_error_detail(_syntax_error())
    assert detail["message"].startswith("Syntax Error")
    assert detail["locations"] == [{"line": 1, "column": 8}]
    assert "path" not in detail


def test_graphql_error_detail_keeps_path() -> None:
    error = GraphQLError("bad field", path=["user", "name"])
    assert exc.format_error_detail(error) == {"message": "bad field", "path": ["user", "name"]}


def test_graphql_error_without_location_has_message_only() -> None:
    error = GraphQLError("Query root type must be provided.", source=Source("type A"))
    assert exc.format_error_detail(error) == {"message": "Query root type must be provided."}


def test_exception_and_dict_details() -> None:
    assert exc.format_error_detail(RuntimeError("down")) == {"message": "down"}
    assert exc.format_error_detail({"message": "m", "code": 1}) == {"message": "m", "code": 1}


def test_errors_are_kept_unformatted() -> None:
    original = _syntax_error()
    error = exc.RequestError(original.message, errors=[original])
    assert error.errors == [original]


def test_str_lists_details() -> None:
    error = exc.SchemaCompositionError("Invalid GraphQL schema", errors=["first", "second"])
    assert str(error) == "Invalid GraphQL schema:\n  - first\n  - second"


def test_extra_is_kept() -> None:
    error = exc.RequestError("x", type=exc.RequestError.FIELD_ERRORS, extra={"data": {"a": None}})
    assert error.extra["data"] == {"a": None}


def test_model_error_alias() -> None:
    assert exc.ModelError is exc.GraphQLModelError
    assert issubclass(exc.RequestError, exc.ModelError)
    assert issubclass(exc.SchemaCompositionError, exc.ModelError)


def test_docstring_examples_are_indented_under_heading() -> None:
    for cls in (exc.GraphQLModelError, exc.SchemaCompositionError):
        doc = inspect.getdoc(cls)
        assert f"Example:\n    raise {cls.__name__}(" in doc
