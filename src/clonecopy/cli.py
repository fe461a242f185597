"""
clonecopy - copy a file with its mode bits, cloning blocks when possible.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import CopyConfig
from .errors import CopyError
from .operations import copy
from .verify import BUFFER_SIZE, HASH_ALGORITHMS, verify_copy


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Parameters
    ----------
    verbose : bool
        Enable verbose logging
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        prog="clonecopy",
        description="Copy a file and its mode bits, using filesystem clones when available",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s source.mov /backup/                  # copy into a directory
  %(prog)s -P link.txt copy-of-link.txt         # recreate a symlink instead of following it
  %(prog)s --no-clone -t xxh64be a.bin b.bin    # byte copy, then verify by hash
        """,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    symlinks = parser.add_mutually_exclusive_group()
    symlinks.add_argument(
        "-P",
        "--no-dereference",
        dest="follow_symlinks",
        action="store_false",
        help="Copy symlinks as symlinks",
    )
    symlinks.add_argument(
        "-L",
        "--dereference",
        dest="follow_symlinks",
        action="store_true",
        help="Copy the file a symlink points to (default)",
    )
    parser.set_defaults(follow_symlinks=True)

    parser.add_argument(
        "--no-clone",
        action="store_true",
        help="Always copy bytes, never try a filesystem clone",
    )

    parser.add_argument(
        "-t",
        "--hash",
        type=str,
        default=None,
        choices=HASH_ALGORITHMS,
        help="Verify the copy with this hash algorithm",
    )

    parser.add_argument(
        "-b",
        "--buffer-size",
        type=int,
        default=BUFFER_SIZE,
        help="Buffer size in bytes (default: 8MB)",
    )

    parser.add_argument("source", type=Path, help="Source file path")
    parser.add_argument("destination", type=Path, help="Destination file or directory")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Main function for clonecopy.

    Returns
    -------
    int
        Exit code: 0 for success, 1 for failure, 130 for keyboard interrupt
    """
    args = parse_arguments(argv)

    try:
        config = CopyConfig.from_args(args)
        setup_logging(config.verbose)

        final_path = copy(
            args.source,
            args.destination,
            follow_symlinks=args.follow_symlinks,
            config=config,
        )
        logging.info(f"copied {args.source} -> {final_path}")

        if config.verify_hash and not final_path.is_symlink():
            result = verify_copy(
                args.source, final_path, config.verify_hash, config.buffer_size
            )
            if not result.verified:
                logging.error(
                    f"Verification FAILED: {result.source_hash} != {result.destination_hash}"
                )
                return 1
            logging.info(f"hash {config.verify_hash.upper()}:{result.source_hash}")

        return 0

    except KeyboardInterrupt:
        logging.error("Operation interrupted by user")
        return 130
    except ValueError as e:
        logging.error(f"Invalid parameter: {e}")
        return 1
    except CopyError as e:
        logging.error(f"Copy failed ({e.kind.value}): {e}")
        return 1
    except FileNotFoundError as e:
        logging.error(f"File not found: {e}")
        return 1
    except OSError as e:
        logging.error(f"I/O error: {e}")
        return 1
