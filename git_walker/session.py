"""Main walk orchestration class."""

import logging
from typing import Optional

from .atomize import AtomizationEngine
from .config import WalkConfig
from .errors import GitWalkerError
from .git import Git
from .logging_setup import Colors, setup_logging
from .models import Candidate, ValidationOutcome, WalkReport
from .resolver import CommitRangeResolver
from .validation import ValidationRunner
from .walker import RepositoryWalker

PASS_MARKER = "✓"
FAIL_MARKER = "✗"


def format_message(message: Optional[str]) -> Optional[str]:
    """Shorten a commit message for the per-commit report line.

    Returns None for an empty message. Short subjects are padded so the
    markers line up; long ones are cut to 20 characters plus an ellipsis.
    """
    if not message or not message.strip():
        return None
    subject = message.strip().splitlines()[0].strip()
    if len(subject) < 20:
        return f"{subject:<23}"
    return f"{subject[:20]}..."


def format_outcome(commit: str, message: Optional[str], passed: bool) -> str:
    """Build the report line for one validated commit."""
    if passed:
        marker = Colors.paint(PASS_MARKER, Colors.GREEN)
    else:
        marker = Colors.paint(FAIL_MARKER, Colors.RED)
    subject = format_message(message)
    if subject is None:
        return f"{commit} : {marker}"
    return f"{commit} : {subject} : {marker}"


class WalkSession:
    """Run one walk from configuration to report.

    This class wires the resolver, walker and validation runner together:
    - Range resolution
    - Checking out and validating every commit
    - Optional atomization of the outcomes
    - Result reporting
    """

    def __init__(self, config: WalkConfig, logger: Optional[logging.Logger] = None):
        self.config = config
        self.logger = logger or setup_logging(config.verbose)

        self.git = Git(config.repo_path, self.logger)
        self.resolver = CommitRangeResolver(self.git, self.logger)
        self.walker = RepositoryWalker(self.git, self.logger)
        self.runner = ValidationRunner(self.logger)

        self.report = WalkReport(range=config.range)
        self.engine = AtomizationEngine() if config.atomize else None

    def print_config(self):
        """Print the configuration."""
        commit_range = self.config.range
        separator = "..." if commit_range.merge_base else ".."
        mode = "atomize" if self.config.atomize else "test"
        print(f"{Colors.BOLD}Configuration:{Colors.RESET}")
        print(f"  Repository: {Colors.WHITE}{self.config.repo_path}{Colors.RESET}")
        print(f"  Range:      {Colors.YELLOW}{commit_range.start}{separator}{commit_range.end}{Colors.RESET}")
        print(f"  Command:    {Colors.WHITE}{self.config.command}{Colors.RESET}")
        print(f"  Mode:       {mode}")
        print(flush=True)

    def visit(self, commit: str) -> bool:
        """Validate the checked out commit and record the outcome."""
        passed = self.runner.run_command(
            self.config.repo_path, self.config.command, self.config.silent
        )
        outcome = ValidationOutcome(commit=commit, passed=passed)
        self.report.add_outcome(outcome)
        if self.engine is not None:
            self.engine.add_outcome(outcome)

        message = self.git.get_commit_message(commit)
        print(format_outcome(commit, message, passed), flush=True)
        return True

    def print_candidate(self, candidate: Candidate):
        failing = ", ".join(commit[:12] for commit in candidate.failing_commits)
        print(
            f"  {Colors.GREEN}{candidate.target_commit[:12]}{Colors.RESET}"
            f" -> {Colors.RED}{failing}{Colors.RESET}"
        )

    def print_atomization(self):
        """Print the regression windows found by the walk."""
        result = self.report.atomization
        print()
        print(f"{Colors.BOLD}Regression candidates:{Colors.RESET}")
        if not result.candidates:
            print(f"  {Colors.DIM}(none){Colors.RESET}")
        for candidate in result.candidates:
            self.print_candidate(candidate)
        if result.open_candidate:
            print(f"{Colors.BOLD}Still failing at end of range:{Colors.RESET}")
            self.print_candidate(result.open_candidate)

    def print_summary(self):
        print()
        print(f"{Colors.BOLD}Walk Summary:{Colors.RESET}")
        print(f"  Commits visited: {len(self.report.outcomes)}")
        print(f"  Passed:          {Colors.GREEN}{self.report.passed}{Colors.RESET}")
        print(f"  Failed:          {Colors.RED}{self.report.failed}{Colors.RESET}")
        print(flush=True)

    def save_report(self):
        """Save the report if report_path is configured."""
        if self.config.report_path:
            self.report.save(self.config.report_path)
            self.logger.debug(f"Report saved to: {self.config.report_path}")

    def run(self) -> int:
        """Main entry point.

        Returns:
            Exit code: 0 for a completed walk, 1 for any walk error.
        """
        self.print_config()

        try:
            self.walker.ensure_clean()
            commits = self.resolver.resolve(self.config.range)
            self.logger.info(f"Walking {len(commits)} commit(s)...")
            self.walker.walk(commits, self.visit)

        except KeyboardInterrupt:
            print()
            self.logger.warning("Walk interrupted by user")
            self.report.status = "aborted"
            self.save_report()
            return 1

        except GitWalkerError as e:
            self.logger.error(f"Walk failed: {e}")
            if e.teardown_error is not None:
                self.logger.error(f"Restoring the repository also failed: {e.teardown_error}")
            self.report.status = "aborted"
            self.save_report()
            return 1

        self.report.status = "completed"
        if self.engine is not None:
            self.report.atomization = self.engine.result()
            self.print_atomization()
        self.print_summary()
        self.save_report()
        return 0
