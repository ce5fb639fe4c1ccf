import httpx
import pytest

from frontend.api_client import ApiError, PropertyApiClient

BASE_URL = "http://api.test/api"


def make_client(handler):
    return PropertyApiClient(BASE_URL, timeout=2.0, transport=httpx.MockTransport(handler))


def test_list_properties_sends_only_meaningful_filters():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(
            200,
            json={"data": [], "totalCount": 0, "pageNumber": 1, "pageSize": 1000, "totalPages": 0},
        )

    client = make_client(handler)
    client.list_properties(name="  villa ", address="   ", min_price=0, max_price=500000, page_size=1000)

    assert seen["url"].path == "/api/Properties"
    assert dict(seen["url"].params) == {"name": "villa", "maxPrice": "500000", "pageSize": "1000"}


def test_list_properties_normalizes_bare_array():
    def handler(request):
        return httpx.Response(200, json=[{"id": "1"}, {"id": "2"}])

    body = make_client(handler).list_properties(page_size=1000)

    assert body["totalCount"] == 2
    assert body["totalPages"] == 1
    assert body["pageSize"] == 1000


def test_server_error_raises_api_error_with_message():
    def handler(request):
        return httpx.Response(500, json={"message": "Error retrieving properties", "error": "boom"})

    with pytest.raises(ApiError) as excinfo:
        make_client(handler).list_properties()

    assert excinfo.value.status_code == 500
    assert "Error retrieving properties" in excinfo.value.message


def test_connection_error_raises_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(ApiError):
        client.list_properties()
    assert client.test_connection() is False


def test_timeout_raises_api_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ApiError) as excinfo:
        make_client(handler).get_property("abc")
    assert "timed out" in excinfo.value.message


def test_not_found_maps_to_none_and_false():
    def handler(request):
        return httpx.Response(404, json={"message": "Property with ID abc not found"})

    client = make_client(handler)
    assert client.get_property("abc") is None
    assert client.update_property("abc", {"name": "x"}) is False
    assert client.delete_property("abc") is False


def test_create_property_posts_json():
    def handler(request):
        assert request.method == "POST"
        return httpx.Response(201, json={"id": "new", "name": "Harbor View"})

    created = make_client(handler).create_property({"name": "Harbor View"})
    assert created["id"] == "new"


def test_validation_error_on_create():
    def handler(request):
        return httpx.Response(400, json={"message": "Validation failed", "errors": []})

    with pytest.raises(ApiError) as excinfo:
        make_client(handler).create_property({})
    assert excinfo.value.status_code == 400


def test_fetch_snapshot_checks_connection_then_fetches_bulk():
    seen = []

    def handler(request):
        seen.append(dict(request.url.params))
        return httpx.Response(
            200,
            json={"data": [{"id": "1"}], "totalCount": 1, "pageNumber": 1, "pageSize": 1000, "totalPages": 1},
        )

    snapshot = make_client(handler).fetch_snapshot(page_size=1000)

    assert snapshot == [{"id": "1"}]
    assert seen == [{"pageSize": "1"}, {"pageSize": "1000"}]


def test_fetch_snapshot_reports_unreachable_backend():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as excinfo:
        make_client(handler).fetch_snapshot(page_size=1000)

    assert "Cannot connect to server" in excinfo.value.message
    assert BASE_URL in excinfo.value.message
    assert len(calls) == 1
