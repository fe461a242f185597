"""
Configuration for copy operations.
"""

import argparse
from dataclasses import dataclass, field

from .clone import CloneStrategy, no_clone, try_clone
from .verify import BUFFER_SIZE, HASH_ALGORITHMS


@dataclass
class CopyConfig:
    """
    Configuration for file copy operations.

    Attributes
    ----------
    buffer_size : int, default=8MB
        Read size for the byte-copy path
    use_clone : bool, default=True
        Try the clone fast path before copying bytes
    verify_hash : str | None, default=None
        Algorithm for post-copy hash verification, None disables it
    verbose : bool, default=False
        Enable debug logging in the command-line tool
    clone_strategy : CloneStrategy
        Fast path implementation, selected from ``use_clone`` and the platform
    """

    buffer_size: int = BUFFER_SIZE
    use_clone: bool = True
    verify_hash: str | None = None
    verbose: bool = False
    clone_strategy: CloneStrategy = field(init=False, repr=False)

    def __post_init__(self):
        """Validate configuration and select the clone strategy."""
        if self.buffer_size <= 0:
            raise ValueError(f"Buffer size must be positive, got {self.buffer_size}")

        if self.verify_hash is not None:
            if self.verify_hash.lower() not in HASH_ALGORITHMS:
                raise ValueError(f"Invalid hash algorithm: {self.verify_hash}")
            self.verify_hash = self.verify_hash.lower()

        self.clone_strategy = try_clone if self.use_clone else no_clone

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CopyConfig":
        """Create config from command-line arguments."""
        return cls(
            buffer_size=args.buffer_size,
            use_clone=not args.no_clone,
            verify_hash=args.hash,
            verbose=args.verbose,
        )
