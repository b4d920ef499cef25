"""
Content digest helpers.

Used to fingerprint binary payloads (images) before they are sent.
"""

import hashlib


def _to_bytes(data: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def md5(data: str | bytes | bytearray | memoryview) -> str:
    """Generate md5 hex digest."""
    return hashlib.md5(_to_bytes(data)).hexdigest()


def sha1(data: str | bytes | bytearray | memoryview) -> str:
    """Generate sha1 hex digest."""
    return hashlib.sha1(_to_bytes(data)).hexdigest()


digest_md5 = md5
digest_sha1 = sha1
