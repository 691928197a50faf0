"""
Input validation utilities for coordinates and workflow parameters
"""
import math


class ValidationError(Exception):
    """Custom validation error"""
    pass


def _require_finite(value: float, label: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{label} must be finite")
    return value


def validate_latitude(lat: float) -> float:
    """
    Validate latitude coordinate

    Args:
        lat: Latitude value

    Returns:
        Validated latitude

    Raises:
        ValidationError: If latitude is not finite or out of range
    """
    lat = _require_finite(lat, "Latitude")
    if not -90.0 <= lat <= 90.0:
        raise ValidationError(f"Latitude {lat} out of range (must be -90 to 90)")

    return lat


def validate_longitude(lon: float) -> float:
    """
    Validate longitude coordinate

    Args:
        lon: Longitude value

    Returns:
        Validated longitude

    Raises:
        ValidationError: If longitude is not finite or out of range
    """
    lon = _require_finite(lon, "Longitude")
    if not -180.0 <= lon <= 180.0:
        raise ValidationError(f"Longitude {lon} out of range (must be -180 to 180)")

    return lon


def validate_radius(radius: float, max_radius: float = 50000.0) -> float:
    """
    Validate search radius (in meters)

    Args:
        radius: Search radius
        max_radius: Maximum allowed radius (default 50km)

    Returns:
        Validated radius

    Raises:
        ValidationError: If radius is invalid
    """
    radius = _require_finite(radius, "Radius")
    if radius <= 0:
        raise ValidationError("Radius must be positive")

    if radius > max_radius:
        raise ValidationError(f"Radius {radius}m exceeds maximum {max_radius}m")

    return radius


def validate_delay(delay: float) -> float:
    """Validate a scheduling delay in seconds."""
    delay = _require_finite(delay, "Delay")
    if delay < 0:
        raise ValidationError("Delay must not be negative")
    return delay
