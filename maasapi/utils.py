"""Utility functions for the MAAS API client."""

from typing import Optional


def join_urls(base: str, *parts: str) -> str:
    """Join URL path segments with exactly one slash between them.

    The result always ends with a slash, as MAAS endpoint paths do.

    Args:
        base: Base URL (e.g. 'http://maas.example.com/MAAS')
        *parts: Path segments to append

    Returns:
        Joined URL (e.g. 'http://maas.example.com/MAAS/api/2.0/machines/')
    """
    url = base.rstrip('/')
    for part in parts:
        part = part.strip('/')
        if part:
            url = f"{url}/{part}"
    return url + '/'


def format_bytes(bytes_value: Optional[int]) -> str:
    """Convert bytes to human-readable format.

    Args:
        bytes_value: Size in bytes

    Returns:
        Formatted string (e.g., "32.00 GB")
    """
    if bytes_value is None:
        return "N/A"

    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_value < 1024.0:
            return f"{bytes_value:.2f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.2f} PB"
