"""Failure reasons for the workout suggestion pipeline.

Failures are values, not exceptions:
- CONFIGURATION: API key or URL missing, no request was sent
- HTTP_STATUS: upstream answered with a non-2xx status
- EMPTY_RESPONSE: upstream answered 2xx with zero candidates
- MALFORMED_RESPONSE: 2xx body was not the expected JSON shape
- TRANSPORT: connection-level error
- TIMEOUT: the 30 second deadline elapsed
- CANCELLED: the caller's cancellation signal fired
"""

from enum import StrEnum


class SuggestionFailureReason(StrEnum):
    CONFIGURATION = "configuration"
    HTTP_STATUS = "http_status"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


NO_RESPONSE_MESSAGE = "No response received from Gemini API"
GENERIC_FAILURE_MESSAGE = "An error occurred while processing your request"
