"""
City Explorer Backend — Exception Hierarchy
=============================================

What:  Application-specific exceptions, one per failure class.
How:   Each exception carries a user-safe message and an optional context
       dict. Services raise them; the global handlers registered in
       main.py turn them into JSON responses.

Exception Hierarchy:
    CityExplorerError (base)
    ├── ValidationError   → 400 Bad Request (missing/invalid query input)
    ├── NotFoundError     → 404 Not Found (provider answered, nothing usable)
    ├── ProviderError     → 502 Bad Gateway (upstream call failed)
    └── StoreError        → 500 Internal Server Error (location cache I/O)

A failure is classified once, at the point where it happens, and then
propagates unchanged to the handler. Nothing is retried.
"""

from typing import Any, Dict, Optional


class CityExplorerError(Exception):
    """
    Base exception for all City Explorer errors.

    Attributes:
        message:  User-facing description (safe to return in a response)
        context:  Debug details, logged but not returned for server errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CityExplorerError):
    """
    Raised when a query parameter is missing or malformed.

    When:    Empty city / search_query, non-positive or non-numeric page,
             latitude/longitude that do not parse as numbers.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(CityExplorerError):
    """
    Raised when a provider succeeded but returned nothing usable.

    When:    The geocoding provider returns an empty candidate list.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        query: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No {resource} was found"
        if query:
            message = f"No {resource} was found for '{query}'"
        ctx = context or {}
        ctx["resource"] = resource
        if query:
            ctx["query"] = query
        super().__init__(message=message, context=ctx)


class ProviderError(CityExplorerError):
    """
    Raised when an outbound provider call fails.

    When:    Transport error, timeout, non-2xx status, or a payload that
             cannot be decoded into the expected shape.
    HTTP:    502 Bad Gateway

    The user-facing message names the provider ("LocationIQ failed");
    the underlying error text stays in `detail` and in the logs.

    Attributes:
        provider:     Registry name of the provider ("geocode", "yelp", ...)
        display_name: Human-readable provider name
        detail:       Underlying error message
        status_code:  Upstream HTTP status, when there was one
    """

    def __init__(
        self,
        provider: str,
        detail: str = "",
        display_name: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.provider = provider
        self.display_name = display_name or provider
        self.detail = detail
        self.status_code = status_code
        ctx = context or {}
        ctx["provider"] = provider
        if status_code is not None:
            ctx["upstream_status"] = status_code
        super().__init__(message=f"{self.display_name} failed", context=ctx)


class StoreError(CityExplorerError):
    """
    Raised when the location cache cannot be read or written.

    HTTP:    500 Internal Server Error

    The response message is always generic; the SQL error type is kept in
    `context` for the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
