import pytest

from costume_rental.client.api_client import (
    ACCESSORIES,
    ADMIN_BOOKINGS,
    ADMIN_ITEMS,
    BOOKINGS,
    CATEGORIES,
    COSTUMES,
    DASHBOARD_STATS,
    ApiClient,
    build_key,
    invalidation_targets,
)
from costume_rental.client.errors import (
    ApiError,
    ConflictError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from tests.fakes import FakeSession, make_response


def make_client(*responses):
    session = FakeSession(*responses)
    return ApiClient("http://api.test/", session=session), session


# --------
# Keys and invalidation
# --------


def test_build_key_sorts_and_drops_empty_params():
    key = build_key(COSTUMES, {"theme": "Mythology", "size": "M", "category": None, "search": ""})
    assert key == "/api/costumes?size=M&theme=Mythology"
    assert build_key(COSTUMES) == COSTUMES


def test_booking_invalidates_catalog_and_admin_reads():
    targets = invalidation_targets(BOOKINGS)
    for path in (COSTUMES, ACCESSORIES, ADMIN_ITEMS, ADMIN_BOOKINGS, DASHBOARD_STATS):
        assert path in targets


def test_nested_path_uses_its_collection():
    assert invalidation_targets(f"{ADMIN_BOOKINGS}/b1/status") == invalidation_targets(
        ADMIN_BOOKINGS
    )


# --------
# Requests
# --------


def test_get_parses_json_and_caches():
    client, session = make_client(make_response(body=[{"id": "c1"}]))

    assert client.get(COSTUMES, {"size": "M"}) == [{"id": "c1"}]
    assert client.get(COSTUMES, {"size": "M"}) == [{"id": "c1"}]

    assert len(session.requests) == 1
    assert session.requests[0]["url"] == "http://api.test/api/costumes"
    assert session.requests[0]["params"] == {"size": "M"}


def test_get_returns_text_for_non_json():
    client, _ = make_client(make_response(body="pong"))
    assert client.get("/ping") == "pong"


def test_get_distinguishes_params():
    client, session = make_client(
        make_response(body=[{"id": "c1"}]), make_response(body=[])
    )

    client.get(COSTUMES, {"size": "M"})
    client.get(COSTUMES, {"size": "L"})

    assert len(session.requests) == 2


def test_post_booking_invalidates_reads():
    client, session = make_client(
        make_response(body=[{"id": "c1", "status": "available"}]),
        make_response(body=[{"name": "Footwear"}]),
        make_response(status_code=201, body={"id": "b1"}),
        make_response(body=[{"id": "c1", "status": "rented"}]),
    )
    client.get(COSTUMES)
    client.get(CATEGORIES)

    assert client.post(BOOKINGS, json={"items": []}) == {"id": "b1"}

    assert COSTUMES not in client.cache
    assert CATEGORIES in client.cache
    assert client.get(COSTUMES) == [{"id": "c1", "status": "rented"}]
    assert len(session.requests) == 4


def test_failed_mutation_keeps_cache():
    client, _ = make_client(
        make_response(body=[{"id": "c1"}]),
        make_response(status_code=409, body={"detail": "Item unavailable"}),
    )
    client.get(COSTUMES)

    with pytest.raises(ConflictError):
        client.post(BOOKINGS, json={})

    assert COSTUMES in client.cache


def test_delete_with_empty_body():
    client, session = make_client(make_response(status_code=204))

    assert client.delete(f"{ADMIN_ITEMS}/c1") is None
    assert session.requests[0]["method"] == "DELETE"


def test_close_clears_cache_and_session():
    client, session = make_client(make_response(body=[]))
    client.get(CATEGORIES)

    client.close()

    assert len(client.cache) == 0
    assert session.closed


# --------
# Errors
# --------


def test_server_error_uses_reason_phrase():
    client, _ = make_client(
        make_response(status_code=503, body={"detail": "db down"}, reason="Service Unavailable")
    )

    with pytest.raises(ServerError) as exc_info:
        client.get(DASHBOARD_STATS)

    assert str(exc_info.value) == "503: Service Unavailable"


def test_unauthorized_message():
    client, _ = make_client(
        make_response(status_code=401, body={"detail": "Please log in"}, reason="Unauthorized")
    )

    with pytest.raises(UnauthorizedError) as exc_info:
        client.get(ADMIN_ITEMS)

    assert str(exc_info.value) == "401: Unauthorized Unauthorized"
    assert exc_info.value.detail == "Please log in"


def test_other_errors_use_body_text():
    client, _ = make_client(make_response(status_code=404, body="no such costume"))

    with pytest.raises(NotFoundError) as exc_info:
        client.get(f"{COSTUMES}/c9")

    assert str(exc_info.value) == "404: no such costume"


def test_empty_body_falls_back_to_reason():
    client, _ = make_client(make_response(status_code=418, reason="I'm a Teapot"))

    with pytest.raises(ApiError) as exc_info:
        client.get("/teapot")

    assert str(exc_info.value) == "418: I'm a Teapot"


def test_conflict_exposes_item_ids():
    client, _ = make_client(
        make_response(
            status_code=409,
            body={
                "detail": 'Item "Crown" is not available for the selected dates',
                "error_type": "conflict_error",
                "details": {"item_ids": ["a1"]},
            },
        )
    )

    with pytest.raises(ConflictError) as exc_info:
        client.post(BOOKINGS, json={})

    assert exc_info.value.item_ids == ["a1"]
    assert "Crown" in exc_info.value.detail


@pytest.mark.parametrize(
    "status_code, body, field",
    [
        (400, {"detail": "bad dates", "details": {"field": "end_date"}}, "end_date"),
        (
            422,
            {
                "detail": "Request validation failed",
                "details": {"validation_errors": [{"loc": ["body", "customer_email"]}]},
            },
            "customer_email",
        ),
    ],
)
def test_validation_error_field(status_code, body, field):
    client, _ = make_client(make_response(status_code=status_code, body=body))

    with pytest.raises(ValidationError) as exc_info:
        client.post(BOOKINGS, json={})

    assert exc_info.value.field == field
