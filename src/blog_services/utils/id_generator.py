"""Utility functions for generating record IDs."""

import secrets
from collections.abc import Container


def generate_short_id(num_bytes: int = 4) -> str:
    """Generate a short random hex token.

    Args:
        num_bytes: Number of random bytes; the token has twice as many characters

    Returns:
        A lowercase hex string, e.g. ``"9f3a01c2"`` for the default 4 bytes
    """
    return secrets.token_hex(num_bytes)


def generate_unique_id(taken: Container[str], num_bytes: int = 4) -> str:
    """Generate a short ID that is not already in ``taken``.

    Args:
        taken: IDs already in use (anything supporting ``in``)
        num_bytes: Number of random bytes per attempt

    Returns:
        A short hex ID not contained in ``taken``
    """
    candidate = generate_short_id(num_bytes)
    while candidate in taken:
        candidate = generate_short_id(num_bytes)
    return candidate
