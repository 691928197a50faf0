"""
Custom exceptions for Coffee Finder.

Service failures inside the refresh workflow are terminal where they occur:
the controller logs them and waits for the next location fix or selection.
The HTTP layer maps the same exceptions onto error envelopes.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Input errors
    INVALID_LOCATION = "INVALID_LOCATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PLACE_NOT_FOUND = "PLACE_NOT_FOUND"

    # Workflow errors
    LOCATION_UNAVAILABLE = "LOCATION_UNAVAILABLE"
    SEARCH_FAILED = "SEARCH_FAILED"
    DIRECTIONS_FAILED = "DIRECTIONS_FAILED"
    NO_ROUTE_FOUND = "NO_ROUTE_FOUND"

    # System errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class CoffeeFinderException(Exception):
    """Base exception for Coffee Finder."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class InvalidLocationError(CoffeeFinderException):
    """Raised when a coordinate is not finite or out of range."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_LOCATION,
            details=details,
            status_code=400
        )


class LocationUnavailableError(CoffeeFinderException):
    """Raised when an operation needs the user's location before any fix arrived."""

    def __init__(self, message: str = "No location fix is available yet"):
        super().__init__(
            message=message,
            error_code=ErrorCode.LOCATION_UNAVAILABLE,
            status_code=409
        )


class SearchFailedError(CoffeeFinderException):
    """Raised when the place search provider fails."""

    def __init__(self, message: str = "Place search failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.SEARCH_FAILED,
            details=details,
            status_code=502
        )


class DirectionsFailedError(CoffeeFinderException):
    """Raised when the directions provider fails."""

    def __init__(self, message: str = "Directions request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.DIRECTIONS_FAILED,
            details=details,
            status_code=502
        )


class NoRouteFoundError(CoffeeFinderException):
    """Raised when the directions provider answers with zero routes."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="No route found to the selected destination",
            error_code=ErrorCode.NO_ROUTE_FOUND,
            details=details,
            status_code=404
        )


class PlaceNotFoundError(CoffeeFinderException):
    """Raised when a selection does not match a displayed place."""

    def __init__(self, index: int, available: int):
        super().__init__(
            message=f"No place at index {index}",
            error_code=ErrorCode.PLACE_NOT_FOUND,
            details={"index": index, "available": available},
            status_code=404
        )
