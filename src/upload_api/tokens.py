"""Random identifiers for stored files."""

import secrets

from upload_api.errors import RandomSourceError


def generate_token(n: int) -> str:
    """
    Return ``n`` cryptographically random bytes, hex-encoded.

    Args:
        n: Number of random bytes; the result has ``2 * n`` characters

    Returns:
        str: Lowercase hex token

    Raises:
        ValueError: If ``n`` is not positive
        RandomSourceError: If the OS entropy source cannot be read
    """
    if n <= 0:
        raise ValueError(f"Token length must be positive, got {n}")
    try:
        return secrets.token_hex(n)
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError(str(e)) from e
