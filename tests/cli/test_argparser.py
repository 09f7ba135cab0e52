"""Unit tests for the argument parser module in the dirdigest CLI."""

import pytest

from dirdigest import __version__
from dirdigest.cli.argparser import build_config, create_parser, parse_args
from dirdigest.config import DEFAULT_OUTPUT
from dirdigest.exclusion_rules.defaults import DEFAULT_IGNORE_FILE_NAMES


def test_defaults():
    """Test the parsed values and the resulting configuration with no arguments."""
    args = parse_args([])
    assert args.path == "."
    assert args.include == []
    assert args.exclude == []
    assert args.max_size == "100"
    assert args.output is None
    assert args.format == "text"
    assert not args.verbose and not args.quiet

    config = build_config(args)
    assert config.root == "."
    assert config.output == DEFAULT_OUTPUT
    assert config.follow_symlinks
    assert config.use_default_excludes
    assert config.skip_hidden
    assert config.ignore_file_names == DEFAULT_IGNORE_FILE_NAMES


def test_all_options():
    args = parse_args(
        [
            "project",
            "-i",
            "*.py",
            "--include",
            "*.md",
            "-e",
            "tests/",
            "--max-size",
            "1MB",
            "-o",
            "out.txt",
            "-f",
            "xml",
            "--no-follow-symlinks",
            "--no-default-excludes",
            "--hidden",
            "--ignore-file",
            ".dockerignore",
            "-v",
        ]
    )
    config = build_config(args)
    assert config.root == "project"
    assert config.include == ("*.py", "*.md")
    assert config.exclude == ("tests/",)
    assert config.max_size == "1MB"
    assert config.output == "out.txt"
    assert config.output_format == "xml"
    assert not config.follow_symlinks
    assert not config.use_default_excludes
    assert not config.skip_hidden
    assert config.ignore_file_names == (".dockerignore",)
    assert args.verbose


def test_stdout_output():
    assert build_config(parse_args(["-o", "-"])).output is None


def test_default_output_extension_follows_format():
    """Test that the default output file name takes the extension of the chosen format."""
    assert build_config(parse_args(["-f", "xml"])).output == "digest.xml"
    assert build_config(parse_args(["-f", "xml", "-o", "out.txt"])).output == "out.txt"


def test_verbose_and_quiet_are_exclusive():
    with pytest.raises(SystemExit):
        parse_args(["-v", "-q"])


def test_invalid_format():
    with pytest.raises(SystemExit):
        parse_args(["-f", "json"])


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        create_parser().parse_args(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out
