"""Tests for HTTP status and payload validation."""

import pytest

from tvdb.api.errors import ApiError, HttpError, ParseError, TVDBError
from tvdb.api.transport import RawResponse
from tvdb.api.validator import check_http_status, parse_envelope


class TestCheckHttpStatus:
    def test_success_passes_through(self):
        resp = RawResponse(200, "OK", "{}")
        assert check_http_status(resp) is resp

    def test_204_is_success(self):
        resp = RawResponse(204, "No Content", "")
        assert check_http_status(resp) is resp

    def test_unauthorized(self):
        with pytest.raises(HttpError) as exc_info:
            check_http_status(RawResponse(401, "Unauthorized", "not json"))
        assert exc_info.value.status_code == 401
        assert exc_info.value.status_text == "Unauthorized"
        assert str(exc_info.value) == "HTTP 401: Unauthorized"

    def test_redirect_status_is_error(self):
        with pytest.raises(HttpError) as exc_info:
            check_http_status(RawResponse(304, "", ""))
        assert str(exc_info.value) == "HTTP 304"

    def test_errors_share_base_class(self):
        with pytest.raises(TVDBError):
            check_http_status(RawResponse(500, "Internal Server Error", ""))


class TestParseEnvelope:
    def test_object_data(self):
        envelope = parse_envelope('{"data": {"id": 81189}}')
        assert envelope.data == {"id": 81189}
        assert envelope.links is None

    def test_list_data_with_links(self):
        envelope = parse_envelope(
            '{"data": [1, 2], "links": {"first": 1, "next": 2, "last": 3, "prev": null}}'
        )
        assert envelope.data == [1, 2]
        assert envelope.links.next == 2
        assert envelope.links.last == 3
        assert envelope.links.prev is None

    def test_error_field_raises_api_error(self):
        with pytest.raises(ApiError) as exc_info:
            parse_envelope('{"data": null, "Error": "ID not found"}')
        assert exc_info.value.message == "ID not found"

    def test_empty_error_field_is_ignored(self):
        envelope = parse_envelope('{"data": [], "Error": ""}')
        assert envelope.data == []

    def test_invalid_json(self):
        with pytest.raises(ParseError):
            parse_envelope("<html>Bad gateway</html>")

    def test_empty_body(self):
        with pytest.raises(ParseError):
            parse_envelope("")

    def test_non_object_body(self):
        with pytest.raises(ParseError):
            parse_envelope("[1, 2, 3]")

    def test_malformed_links(self):
        with pytest.raises(ParseError):
            parse_envelope('{"data": [], "links": {"next": "soon"}}')

    def test_missing_data_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_envelope("{}")

    def test_links_without_data_is_parse_error(self):
        with pytest.raises(ParseError):
            parse_envelope('{"links": {"next": 2}}')

    def test_explicit_null_data_is_accepted(self):
        assert parse_envelope('{"data": null}').data is None

    def test_error_without_data_is_api_error(self):
        with pytest.raises(ApiError) as exc_info:
            parse_envelope('{"Error": "Not Authorized"}')
        assert exc_info.value.message == "Not Authorized"
