"""Utilities for validating Discord interaction request signatures."""

from __future__ import annotations

import time

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

DISCORD_SIGNATURE_HEADER = "X-Signature-Ed25519"
DISCORD_TIMESTAMP_HEADER = "X-Signature-Timestamp"
DEFAULT_TOLERANCE = 60 * 5  # five minutes


def load_public_key(public_key_hex: str) -> Ed25519PublicKey:
    """Build a verifier from the application's hex-encoded public key."""

    return Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex))


def is_valid_discord_request(
    *,
    public_key: str | Ed25519PublicKey,
    timestamp: str,
    body: str,
    signature: str,
    tolerance: int = DEFAULT_TOLERANCE,
) -> bool:
    """Validate the Ed25519 signature and timestamp of an interaction request."""

    if not timestamp or not signature:
        return False

    try:
        request_ts = int(timestamp)
    except (TypeError, ValueError):
        return False

    current_ts = int(time.time())
    if abs(current_ts - request_ts) > tolerance:
        return False

    try:
        signature_bytes = bytes.fromhex(signature)
        verifier = load_public_key(public_key) if isinstance(public_key, str) else public_key
    except ValueError:
        return False

    try:
        verifier.verify(signature_bytes, f"{timestamp}{body}".encode("utf-8"))
    except InvalidSignature:
        return False
    return True
