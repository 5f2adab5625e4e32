#!/usr/bin/env python3
"""
api_client.py - Pybites Rust exercises API client

Issues the single GET request for the exercise list. Fetching and decoding
are separate steps so the CLI's --test mode can show the status and headers
of a response whose body it never parses.

SECURITY: the API key is only ever logged masked.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from bitefetch.config_utils import API_KEY_ENV_VAR, API_URL
from bitefetch.errors import FetchError, RecordDecodeError, http_status_error
from bitefetch.models import ExerciseRecord, parse_records
from bitefetch.security_utils import mask_sensitive

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

# (connect, read) seconds; single attempt, no retry
REQUEST_TIMEOUT = (10, 60)


def auth_status_message(api_key: Optional[str]) -> str:
    if api_key:
        return "Authenticating with API key"
    return f"No API key set ({API_KEY_ENV_VAR}), downloading free exercises only"


def build_request(url: str, api_key: Optional[str] = None) -> requests.PreparedRequest:
    """
    Prepare the GET request for the exercise list.

    Args:
        url: API endpoint
        api_key: Optional Pybites API key, sent as the X-API-Key header

    Returns:
        A prepared request ready for Session.send()
    """
    headers = {}
    if api_key:
        headers[API_KEY_HEADER] = api_key
    return requests.Request("GET", url, headers=headers).prepare()


class ExerciseClient:
    """Fetches the raw exercise list response from the API"""

    def __init__(
        self,
        url: str = API_URL,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def fetch(self) -> requests.Response:
        """Send the request once and return the undecoded response."""
        request = build_request(self.url, self.api_key)
        if self.api_key:
            logger.info("GET %s (%s: %s)", self.url, API_KEY_HEADER, mask_sensitive(self.api_key))
        else:
            logger.info("GET %s (anonymous)", self.url)

        try:
            response = self.session.send(request, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise FetchError(
                message="Could not reach the exercises API",
                suggestion="Check your network connection and try again",
                context={"url": self.url},
                cause=e,
            ) from e

        logger.debug("Response %s with %d bytes", response.status_code, len(response.content))
        return response


def decode_records(response: requests.Response) -> List[ExerciseRecord]:
    """Check the status and decode the body into exercise records."""
    if not response.ok:
        raise http_status_error(response.url, response.status_code, response.reason or "")

    try:
        payload = response.json()
    except ValueError as e:
        raise RecordDecodeError(
            message="Exercises API did not return valid JSON",
            context={
                "url": response.url,
                "content_type": response.headers.get("Content-Type", "unknown"),
            },
            cause=e,
        ) from e

    return parse_records(payload)


def describe_response(response: requests.Response) -> str:
    """Status line and headers, as shown by --test."""
    lines = [f"Status: {response.status_code} {response.reason or ''}".rstrip(), "Headers:"]
    for name, value in response.headers.items():
        lines.append(f"  {name}: {value}")
    return "\n".join(lines)
