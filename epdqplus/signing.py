"""
epdqplus.signing
~~~~~~~~~~~~~~~~
SHA-512 ``SHASIGN`` computation for Direct Link requests.

The signing buffer is built by visiting parameters in ascending name
order and appending ``NAME=value`` followed by the shared secret for each
non-empty value.  Parameters with an empty value contribute nothing, not
even their name.  The digest is sent as upper-case hex; the secret itself
never leaves the process.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping


def signing_buffer(post_data: Mapping[str, str], secret: str) -> str:
    """Return the exact string that :func:`compute_shasign` hashes.

    Example::

        >>> signing_buffer({"CURRENCY": "USD", "AMOUNT": "4995"}, "SECRET")
        'AMOUNT=4995SECRETCURRENCY=USDSECRET'
    """
    return "".join(
        f"{name}={post_data[name]}{secret}"
        for name in sorted(post_data)
        if post_data[name] != ""
    )


def compute_shasign(post_data: Mapping[str, str], secret: str) -> str:
    """Return the upper-case hex SHA-512 signature of *post_data*.

    Args:
        post_data: Gateway parameter names to string values. A
            ``SHASIGN`` entry, if present, must already be removed.
        secret: SHA-IN pass phrase configured in the ePDQ back office.

    Returns:
        128-character upper-case hex digest.
    """
    buffer = signing_buffer(post_data, secret)
    return hashlib.sha512(buffer.encode("utf-8")).hexdigest().upper()
