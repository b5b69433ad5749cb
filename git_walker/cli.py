"""Command line interface for git-walker."""

import argparse
import os
import sys

from . import __version__
from .config import WalkConfig
from .logging_setup import Colors
from .models import Range
from .session import WalkSession
from .validation import Command


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="git-walker",
        description="git-walker - Run a command against every commit in a range",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the test suite on every commit after v1.0 up to main
  git-walker test . v1.0 main "python3 -m pytest"

  # Same, showing the command's output
  git-walker test ./repo 470ba9d 59d58e3 python3 test.py --verbose

  # Group failures into good -> bad windows
  git-walker atomize . v1.0 main make check

  # Start from the merge base of a feature branch and main
  git-walker test . main feature ./check.sh --merge-base

  # Arguments starting with '-' go after '--'
  git-walker test . v1.0 main pytest -- -x -q

Exit Codes:
  0 - Walk completed (individual commits may have failed)
  1 - Walk failed (dirty repository, bad range, checkout or launch error)
  2 - Invalid arguments
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "path",
        metavar="PATH",
        help="Path to the git repository"
    )
    common.add_argument(
        "start",
        metavar="START-COMMIT",
        help="Commit the range starts after (not visited)"
    )
    common.add_argument(
        "end",
        metavar="END-COMMIT",
        help="Last commit of the range (visited)"
    )
    common.add_argument(
        "command",
        metavar="COMMAND",
        help="Command run in the repository for every commit"
    )
    common.add_argument(
        "args",
        metavar="ARGS",
        nargs="*",
        help="Arguments passed to the command"
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show the command's output and debug logging"
    )
    common.add_argument(
        "--merge-base", "-m",
        action="store_true",
        help="Also visit the merge base of START-COMMIT and END-COMMIT"
    )
    common.add_argument(
        "--report", "-r",
        metavar="FILE",
        help="Write the outcomes as JSON to this file"
    )

    subparsers = parser.add_subparsers(dest="action", metavar="ACTION")
    subparsers.required = True
    subparsers.add_parser(
        "test",
        parents=[common],
        help="Validate every commit in the range"
    )
    subparsers.add_parser(
        "atomize",
        parents=[common],
        help="Validate every commit and report good -> bad windows"
    )

    return parser


def resolve_repo_path(path: str) -> str:
    """Make path absolute against the current directory and canonicalize it."""
    return os.path.realpath(os.path.join(os.getcwd(), path))


def main(argv=None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (default: sys.argv[1:]).

    Returns:
        Exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    repo_path = resolve_repo_path(args.path)
    if not os.path.isdir(repo_path):
        parser.error(f"invalid path {args.path}")

    try:
        command = Command.parse(args.command, args.args)
    except ValueError as e:
        parser.error(f"invalid command: {e}")

    Colors.init()

    config = WalkConfig(
        repo_path=repo_path,
        range=Range(start=args.start, end=args.end, merge_base=args.merge_base),
        command=command,
        verbose=args.verbose,
        atomize=args.action == "atomize",
        report_path=args.report,
    )

    return WalkSession(config).run()


if __name__ == "__main__":
    sys.exit(main())
