# src/fritz/web/security.py
"""Anonymous player identity for the web API."""

from __future__ import annotations

import hashlib
import hmac
import os
from typing import Optional

from fastapi import Request


def get_real_ip(request: Request) -> str:
    """Get real client IP, handling reverse proxy.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address (first in X-Forwarded-For chain if present)
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For: client, proxy1, proxy2
        return forwarded.split(",")[0].strip()
    if request.client is None:
        return "0.0.0.0"
    return request.client.host


def hash_ip(ip: str, salt: Optional[str] = None) -> str:
    """Hash IP address for privacy-preserving storage.

    Args:
        ip: IP address to hash
        salt: Secret salt (defaults to FRITZ_IP_SALT env var)

    Returns:
        Hex-encoded hash
    """
    if salt is None:
        salt = os.environ.get("FRITZ_IP_SALT", "default-dev-salt")

    return hmac.new(
        salt.encode(),
        ip.encode(),
        hashlib.sha256
    ).hexdigest()[:32]
