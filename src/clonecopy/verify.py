"""
Post-copy integrity verification by content hash.
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

import xxhash

BUFFER_SIZE = 8 * 1024 * 1024  # 8MB

HASH_ALGORITHMS = ["xxh64be", "md5", "sha1", "sha256"]


@dataclass
class VerificationResult:
    """
    Result of comparing a copy against its source.

    Attributes
    ----------
    source : Path
        Source file path
    destination : Path
        Destination file path
    algorithm : str
        Hash algorithm used
    source_hash : str
        Digest of the source
    destination_hash : str
        Digest of the destination
    """

    source: Path
    destination: Path
    algorithm: str
    source_hash: str
    destination_hash: str

    @property
    def verified(self) -> bool:
        return self.source_hash == self.destination_hash


class HashCalculator:
    """
    Incremental hash calculator supporting multiple algorithms.

    Parameters
    ----------
    algorithm : str, default="xxh64be"
        Hash algorithm to use. Supported: xxh64be, md5, sha1, sha256
    """

    def __init__(self, algorithm: str = "xxh64be"):
        self.algorithm = algorithm.lower()
        if self.algorithm == "xxh64be":
            self._hasher = xxhash.xxh64()
        elif self.algorithm in ["md5", "sha1", "sha256"]:
            self._hasher = hashlib.new(self.algorithm)
        else:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def hexdigest(self) -> str:
        return self._hasher.hexdigest()

    @staticmethod
    def hash_file(
        path: Path, algorithm: str = "xxh64be", buffer_size: int = BUFFER_SIZE
    ) -> str:
        """
        Hash a whole file.

        Parameters
        ----------
        path : Path
            File to hash, symlinks are followed
        algorithm : str, default="xxh64be"
            Hash algorithm to use
        buffer_size : int, default=BUFFER_SIZE
            Read size in bytes

        Returns
        -------
        str
            Hexadecimal digest
        """
        hasher = HashCalculator(algorithm)
        with open(path, "rb") as f:
            while chunk := f.read(buffer_size):
                hasher.update(chunk)
        return hasher.hexdigest()


def verify_copy(
    source: Path,
    destination: Path,
    algorithm: str = "xxh64be",
    buffer_size: int = BUFFER_SIZE,
) -> VerificationResult:
    """
    Hash source and destination and compare the digests.

    Returns
    -------
    VerificationResult
        Both digests; ``verified`` tells whether they match
    """
    source_hash = HashCalculator.hash_file(source, algorithm, buffer_size)
    destination_hash = HashCalculator.hash_file(destination, algorithm, buffer_size)
    result = VerificationResult(
        source=Path(source),
        destination=Path(destination),
        algorithm=algorithm,
        source_hash=source_hash,
        destination_hash=destination_hash,
    )
    if result.verified:
        logging.debug(f"hash {algorithm.upper()}:{source_hash} matches {destination}")
    else:
        logging.debug(
            f"hash mismatch {algorithm.upper()}: {source_hash} != {destination_hash}"
        )
    return result
