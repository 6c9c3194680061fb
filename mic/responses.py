"""Helpers for reading MIC and Kinvey responses"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ("x-kinveyauth-request-id", "x-kinvey-request-id")


async def post(url: str, stage: str, timeout: float, **kwargs) -> httpx.Response:
    """POST without following redirects

    Args:
        url: Target URL
        stage: What the flow is doing, used in error messages
        timeout: Request timeout in seconds
        **kwargs: Passed through to httpx (data, json, auth)

    Returns:
        The response, whatever its status

    Raises:
        TransportError: If the request could not be completed
    """
    logger.debug(f"POST {url} ({stage})")
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=False) as client:
            response = await client.post(url, **kwargs)
    except httpx.TimeoutException as e:
        raise TransportError(stage, f"timed out after {timeout} seconds ({e})") from e
    except httpx.RequestError as e:
        raise TransportError(stage, str(e) or type(e).__name__) from e

    logger.debug(f"Response status for {stage}: {response.status_code}")
    return response


def parse_json_object(response: httpx.Response) -> Optional[Dict[str, Any]]:
    """Parse a response body as a JSON object, or None if it is not one"""
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def safe_json(response: httpx.Response) -> Dict[str, Any]:
    """Parse a response body as a JSON object

    Args:
        response: The HTTP response

    Returns:
        The parsed object, or an empty dict if the body is not a JSON object
    """
    return parse_json_object(response) or {}


def is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def build_protocol_error(response: httpx.Response, stage: str) -> ProtocolError:
    """Describe a response that did not have the expected success shape

    JSON object bodies contribute the provider's error, description and
    debug fields. Any other body, including one labelled JSON that does not
    parse, is kept as raw text.

    Args:
        response: The unsuccessful HTTP response
        stage: What the flow was doing, e.g. "obtaining temp login URI"

    Returns:
        ProtocolError ready to be raised
    """
    headers = response.headers
    request_id = next((headers[name] for name in REQUEST_ID_HEADERS if name in headers), None)
    content_type = headers.get("content-type", "")

    fields: Dict[str, Any] = {}
    payload = parse_json_object(response) if is_json(response) else None
    if payload is not None:
        fields["error"] = payload.get("error")
        fields["description"] = payload.get("description")
        fields["debug"] = payload.get("debug")
    else:
        fields["body"] = response.text

    logger.debug(f"Request failed while {stage}: status={response.status_code}, request_id={request_id}")

    return ProtocolError(
        stage=stage,
        status_code=response.status_code,
        content_type=content_type,
        request_id=request_id,
        **fields,
    )
