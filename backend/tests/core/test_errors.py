"""Error Hierarchy — each failure kind is distinguishable by code and status."""

from folio.core.errors import (
    ConflictError, ContactValidationError, DatabaseError, DeliveryError,
    FolioError, NotFoundError, PayloadTooLargeError, StorageError,
    UnauthorizedError,
)


def test_statuses_and_codes_are_distinct():
    errors = [
        NotFoundError("Post", "x"),
        ConflictError("Post", "x"),
        UnauthorizedError(),
        ContactValidationError(["name"]),
        StorageError("disk full"),
        DeliveryError("timeout"),
        PayloadTooLargeError(10, 5),
        DatabaseError("boom", "commit"),
    ]
    assert all(isinstance(e, FolioError) for e in errors)
    assert [e.http_status for e in errors] == [404, 409, 401, 400, 500, 502, 413, 503]
    assert len({e.code for e in errors}) == len(errors)


def test_to_response_envelope():
    body = ConflictError("Project", "alpha").to_response()
    assert body["error"]["code"] == "SLUG_CONFLICT"
    assert body["error"]["category"] == "conflict"
    assert body["error"]["context"]["entity"] == "Project"
    assert body["error"]["context"]["slug"] == "alpha"
    assert "timestamp" in body["error"]


def test_not_found_message_names_entity_and_key():
    err = NotFoundError("Post", 42)
    assert err.message == "Post '42' not found"
