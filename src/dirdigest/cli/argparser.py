"""Command-line argument parsing for dirdigest.

This module defines the command-line interface for dirdigest,
handling argument parsing and conversion to a DigestConfig.
"""

import argparse
from typing import List, Optional, Sequence

from dirdigest import __version__
from dirdigest.config import DEFAULT_MAX_SIZE_KB, DigestConfig, default_output_for


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with dirdigest's options.
    """
    description = """
    dirdigest: Generate a directory content digest, intelligently excluding non-source files.

    The digest is a single text file containing a tree of the selected paths followed by
    the contents of the selected files, suitable as context for Large Language Models.

    Selection precedence (highest first):
    - --include patterns: when given, files matching none of them are left out
    - --exclude patterns: always excluded
    - .gitignore / .ignore files, with deeper files overriding shallower ones
    - built-in defaults (hidden files, dependency and build directories, lock files, OS metadata)

    Files larger than --max-size, binary files and files with image, font, archive or
    object-code extensions are listed in the tree without their content.
    """

    epilog = """
    Examples:
      # Digest the current directory into digest.txt
      dirdigest

      # Only Python sources, but not the tests
      dirdigest -i "*.py" -e "tests/" /path/to/project

      # Raise the content limit to 1 MB and write to stdout
      dirdigest --max-size 1MB -o - /path/to/project

      # XML sections, debug logging of every pruning decision
      dirdigest -f xml -v /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="dirdigest",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dirdigest {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="The root directory to process (default: current directory).",
    )
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Glob pattern for files to include. If used, only matching files are included. "
        "Can be specified multiple times.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Additional glob pattern for files or directories to exclude. Always wins over ignore files. "
        "Can be specified multiple times.",
    )
    parser.add_argument(
        "--max-size",
        default=str(DEFAULT_MAX_SIZE_KB),
        metavar="SIZE",
        help=f"Maximum file size for content inclusion, in KB or with a unit such as 1MB "
        f"(default: {DEFAULT_MAX_SIZE_KB}).",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output file name, or '-' for stdout (default: digest.txt, or digest.xml with -f xml).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "xml"],
        default="text",
        help="Format of the file content sections (default: text).",
    )
    parser.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Do not follow symbolic links to directories. Links to files are always read.",
    )
    parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help="Disable the built-in exclusion list.",
    )
    parser.add_argument(
        "--hidden",
        action="store_true",
        help="Include hidden files and directories (names starting with a dot), which are skipped by default.",
    )
    parser.add_argument(
        "--ignore-file",
        action="append",
        dest="ignore_files",
        metavar="NAME",
        help="Name of the ignore files to read in every directory, replacing the default "
        ".gitignore and .ignore. Later names take precedence. Can be specified multiple times.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every selection decision.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")

    return parser


def build_config(args: argparse.Namespace) -> DigestConfig:
    """Convert parsed arguments to a DigestConfig.

    Args:
        args: Parsed command-line arguments.

    Returns:
        The configuration. It is not validated here.
    """
    if args.output is None:
        output: Optional[str] = default_output_for(args.format)
    else:
        output = None if args.output == "-" else args.output
    ignore_files: Optional[List[str]] = args.ignore_files
    extra = {"ignore_file_names": tuple(ignore_files)} if ignore_files else {}
    return DigestConfig(
        root=args.path,
        include=tuple(args.include),
        exclude=tuple(args.exclude),
        max_size=args.max_size,
        output=output,
        output_format=args.format,
        follow_symlinks=not args.no_follow_symlinks,
        use_default_excludes=not args.no_default_excludes,
        skip_hidden=not args.hidden,
        **extra,  # type: ignore[arg-type]
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return create_parser().parse_args(argv)
