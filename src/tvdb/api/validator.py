"""Two-stage response checks: HTTP status, then payload."""

import json
import logging

from pydantic import ValidationError

from tvdb.api.errors import ApiError, HttpError, ParseError
from tvdb.api.models import Envelope
from tvdb.api.transport import RawResponse

logger = logging.getLogger(__name__)


def check_http_status(response: RawResponse) -> RawResponse:
    """Raise ``HttpError`` for non-2xx responses without touching the body."""
    if not response.ok:
        logger.warning("TVDB API error: %d %s", response.status, response.reason)
        raise HttpError(response.status, response.reason)
    return response


def parse_envelope(body: str) -> Envelope:
    """Decode a response body into an ``Envelope``.

    Raises:
        ParseError: If the body is not JSON or not an envelope object
            with a ``data`` key.
        ApiError: If the body carries a non-empty ``Error`` field.
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise ParseError("Response body is not valid JSON", str(e)) from e

    # An error body may omit "data", so check it before the shape.
    if isinstance(payload, dict) and payload.get("Error"):
        message = str(payload["Error"])
        logger.warning("TVDB API returned error: %s", message)
        raise ApiError(message)

    try:
        return Envelope.model_validate(payload)
    except ValidationError as e:
        raise ParseError("Malformed response body", str(e)) from e
