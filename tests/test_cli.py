#!/usr/bin/env python3
"""
Tests for the clonecopy command-line tool.
"""

import logging
import os
import shutil
import stat
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clonecopy import cli
from clonecopy.cli import main, parse_arguments, setup_logging
from clonecopy.verify import VerificationResult


@pytest.fixture
def cli_test_env():
    """Create test environment for CLI tests."""
    test_dir = tempfile.mkdtemp()
    test_path = Path(test_dir)

    source_file = test_path / "source.txt"
    source_file.write_text("content1")
    source_file.chmod(0o600)
    dest_dir = test_path / "dest"
    dest_dir.mkdir()

    yield test_path, source_file, dest_dir
    shutil.rmtree(test_dir)


# ============================================================================
# Argument parsing
# ============================================================================


def test_basic_argument_parsing() -> None:
    """Test defaults."""
    args = parse_arguments(["source.txt", "dest.txt"])

    assert args.source == Path("source.txt")
    assert args.destination == Path("dest.txt")
    assert args.follow_symlinks
    assert not args.verbose
    assert not args.no_clone
    assert args.hash is None
    assert args.buffer_size == 8 * 1024 * 1024


def test_no_dereference_flag() -> None:
    """Test -P disables following symlinks."""
    args = parse_arguments(["-P", "source.txt", "dest.txt"])

    assert not args.follow_symlinks


def test_dereference_flags_exclusive() -> None:
    """Test that -P and -L cannot be combined."""
    with pytest.raises(SystemExit):
        parse_arguments(["-P", "-L", "source.txt", "dest.txt"])


def test_hash_and_buffer_options() -> None:
    """Test hash algorithm and buffer size parsing."""
    args = parse_arguments(
        ["-t", "sha256", "-b", "16777216", "--no-clone", "a", "b"]
    )

    assert args.hash == "sha256"
    assert args.buffer_size == 16777216
    assert args.no_clone


# ============================================================================
# Logging setup
# ============================================================================


def test_setup_logging_info_level() -> None:
    """Test logging setup with INFO level."""
    setup_logging(verbose=False)

    assert logging.getLogger().level == logging.INFO


def test_setup_logging_debug_level() -> None:
    """Test logging setup with DEBUG level."""
    setup_logging(verbose=True)

    assert logging.getLogger().level == logging.DEBUG


# ============================================================================
# main
# ============================================================================


def test_main_copies_into_directory(cli_test_env) -> None:
    """Test a successful copy into a directory."""
    _, source_file, dest_dir = cli_test_env

    exit_code = main([str(source_file), str(dest_dir)])

    copied = dest_dir / "source.txt"
    assert exit_code == 0
    assert copied.read_text() == "content1"
    assert stat.S_IMODE(copied.stat().st_mode) == 0o600


def test_main_with_verification(cli_test_env) -> None:
    """Test copy followed by hash verification."""
    test_path, source_file, _ = cli_test_env

    exit_code = main(["-t", "md5", "--no-clone", str(source_file), str(test_path / "c.txt")])

    assert exit_code == 0


def test_main_verification_failure(cli_test_env) -> None:
    """Test that a hash mismatch fails the run."""
    test_path, source_file, _ = cli_test_env
    mismatch = VerificationResult(
        source=source_file,
        destination=test_path / "c.txt",
        algorithm="md5",
        source_hash="aa",
        destination_hash="bb",
    )

    with patch.object(cli, "verify_copy", return_value=mismatch):
        exit_code = main(["-t", "md5", str(source_file), str(test_path / "c.txt")])

    assert exit_code == 1


def test_main_symlink_skips_verification(cli_test_env) -> None:
    """Test that a recreated link is not hashed."""
    test_path, source_file, _ = cli_test_env
    link = test_path / "link.txt"
    link.symlink_to(source_file.name)
    dest = test_path / "other"
    dest.mkdir()

    with patch.object(cli, "verify_copy") as mock_verify:
        exit_code = main(["-P", "-t", "md5", str(link), str(dest)])

    assert exit_code == 0
    assert os.readlink(dest / "link.txt") == "source.txt"
    mock_verify.assert_not_called()


def test_main_same_file(cli_test_env) -> None:
    """Test that a same-file copy fails the run."""
    _, source_file, _ = cli_test_env

    assert main([str(source_file), str(source_file)]) == 1


def test_main_missing_source(cli_test_env) -> None:
    """Test that a missing source fails the run."""
    test_path, _, dest_dir = cli_test_env

    assert main([str(test_path / "missing.txt"), str(dest_dir)]) == 1


def test_main_invalid_buffer_size(cli_test_env) -> None:
    """Test that an invalid buffer size fails the run."""
    test_path, source_file, _ = cli_test_env

    assert main(["-b", "0", str(source_file), str(test_path / "c.txt")]) == 1


def test_main_keyboard_interrupt(cli_test_env) -> None:
    """Test exit code on Ctrl+C."""
    test_path, source_file, _ = cli_test_env

    with patch.object(cli, "copy", side_effect=KeyboardInterrupt):
        assert main([str(source_file), str(test_path / "c.txt")]) == 130


def test_main_logging_follows_config(cli_test_env) -> None:
    """Test that the verbosity of the built config drives logging setup."""
    test_path, source_file, _ = cli_test_env

    with patch.object(
        cli.CopyConfig, "from_args", return_value=cli.CopyConfig(verbose=True)
    ), patch.object(cli, "setup_logging") as mock_setup:
        exit_code = main([str(source_file), str(test_path / "c.txt")])

    assert exit_code == 0
    mock_setup.assert_called_once_with(True)
