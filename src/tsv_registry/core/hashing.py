import hashlib
from dataclasses import dataclass
from pathlib import Path

SHA256_HEX_LENGTH = 64


@dataclass(frozen=True)
class FileDigest:
    sha256: str
    bytes: int


def sha256_bytes(b: bytes) -> str:
    return hashlib.sha256(b).hexdigest()


def sha256_file(path: Path) -> FileDigest:
    with Path(path).open("rb") as f:
        h = hashlib.file_digest(f, "sha256")
    return FileDigest(sha256=h.hexdigest(), bytes=Path(path).stat().st_size)


def short_digest(b: bytes, *, length: int = 16) -> str:
    """
    Leading `length` hex characters of the SHA-256 digest of `b`.
    """
    if not 1 <= length <= SHA256_HEX_LENGTH:
        raise ValueError(f"digest length must be within 1..{SHA256_HEX_LENGTH}, got {length}")
    return sha256_bytes(b)[:length]
