"""Error Hierarchy — status codes and REST envelope shape."""

from blog.core.errors import (
    BlogError, DecodeError, ErrorCategory, NotFoundError,
    StoreUnavailableError, TransportError,
)


def test_not_found_is_404():
    err = NotFoundError(7)
    assert err.http_status == 404
    assert err.code == "NOT_FOUND"
    assert err.post_id == 7
    assert err.context.post_id == 7


def test_store_unavailable_is_503():
    err = StoreUnavailableError("Connection refused", "list")
    assert err.http_status == 503
    assert err.category == ErrorCategory.DATABASE
    assert err.operation == "list"
    assert "list" in err.message


def test_decode_error_is_400():
    err = DecodeError("bad offset", "offset")
    assert err.http_status == 400
    assert err.field == "offset"


def test_transport_error_category():
    err = TransportError("connection reset")
    assert err.category == ErrorCategory.TRANSPORT


def test_all_errors_share_base():
    for err in (
        NotFoundError(1), StoreUnavailableError("x", "get"),
        DecodeError("x", "f"), TransportError("x"),
    ):
        assert isinstance(err, BlogError)


def test_to_response_envelope():
    body = NotFoundError(3).to_response()
    error = body["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["category"] == "resource_not_found"
    assert error["severity"] == "error"
    assert error["context"]["post_id"] == 3
    assert "timestamp" in error


def test_context_carries_only_reported_fields():
    err = StoreUnavailableError("down", "update")
    assert set(vars(err.context)) == {"timestamp", "post_id", "operation"}
    assert set(err.to_response()["error"]["context"]) == {"post_id", "operation"}
