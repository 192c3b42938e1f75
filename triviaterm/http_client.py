# triviaterm/http_client.py
# =====================================================================================
# PURPOSE
#   Question fetcher (no UI code) that:
#     - Issues ONE blocking GET against the trivia endpoint
#     - Decodes the JSON body into a QuestionBatch
#     - Raises FetchError tagged NETWORK or DECODE on failure
#   No retry, no caching. The caller (a background fetch thread) installs the batch.
#
# KEY TECHNOLOGIES
#   - requests: synchronous HTTP client
# =====================================================================================

from enum import Enum

import requests  # pip install requests

from triviaterm.common import logger
from triviaterm.quiz_types import QuestionBatch


class FetchErrorKind(Enum):
    NETWORK = "network"
    DECODE = "decode"


class FetchError(Exception):
    """Fetching or decoding a question batch failed."""

    def __init__(self, kind: FetchErrorKind, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.kind.value} error: {self.detail}"


def fetch_batch(url: str, *, timeout: float | None = None,
                session: requests.Session | None = None) -> QuestionBatch:
    """Fetch and decode one batch of questions.

    Parameters
    ----------
    url : str
        Full endpoint URL including the amount/category query.
    timeout : float | None
        Passed straight to requests; None means wait indefinitely.
    session : requests.Session | None
        Optional session to issue the request through.
    """
    http = session or requests
    logger.info(f"Fetching questions from {url}")

    try:
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error fetching questions: {e}")
        raise FetchError(FetchErrorKind.NETWORK, str(e)) from e

    try:
        payload = resp.json()
    except ValueError as e:
        # requests' JSONDecodeError subclasses ValueError
        logger.error(f"Error decoding questions: {e}")
        raise FetchError(FetchErrorKind.DECODE, f"response is not valid JSON: {e}") from e

    try:
        batch = QuestionBatch.from_dict(payload)
    except ValueError as e:
        logger.error(f"Unexpected question payload: {e}")
        raise FetchError(FetchErrorKind.DECODE, str(e)) from e

    logger.info(f"Fetched {len(batch)} questions (response_code={batch.response_code})")
    return batch
