"""Command-line interface for dirdigest.

This module provides the command-line entry point: it parses arguments, validates the
configuration before anything is traversed, streams the digest to its destination and
maps failures to exit codes.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error or invalid configuration
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Digest the current directory into digest.txt
    $ dirdigest

    # Only Markdown, to stdout
    $ dirdigest -i "*.md" -o - docs/
"""

import logging
import os
import sys
from typing import Optional, Sequence

from dirdigest.cli.argparser import build_config, parse_args
from dirdigest.cli.safe_writer import SafeWriter
from dirdigest.digest import StreamingDigest
from dirdigest.exceptions import ConfigurationError

logger = logging.getLogger("dirdigest")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr at the level selected on the command line."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr, force=True)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].

    Returns:
        The process exit code.
    """
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        config = build_config(args)
        digest = StreamingDigest(config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        # The temporary output file must not be seen by the walk
        digest.discover()
        with SafeWriter(config.output) as writer:
            for chunk in digest.stream():
                writer.write(chunk)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except BrokenPipeError:
        # Keep the interpreter from reporting the closed pipe again at shutdown
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 141
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(
        "Directories: %d, files: %d, with content: %d, path only: %d",
        digest.directory_count,
        digest.file_count,
        digest.content_file_count,
        digest.skipped_content_count,
    )
    if config.output is not None:
        logger.info("All done. Digest saved to %s", config.output)
    return 0


def main() -> None:
    """Main entry point for the dirdigest command-line interface."""
    sys.exit(run())


if __name__ == "__main__":
    main()
