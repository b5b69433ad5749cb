"""Exception types raised by git-walker.

Every failure that stops a walk derives from GitWalkerError so the CLI can
tell tool errors apart from a validation command that merely failed.
"""

from typing import Optional


class GitWalkerError(Exception):
    """Base class for all git-walker errors."""

    teardown_error: Optional["TeardownError"] = None


class GitError(GitWalkerError):
    """Exception for git command failures."""


class DirtyRepositoryError(GitWalkerError):
    """Raised when the working tree has uncommitted changes."""


class ResolutionError(GitWalkerError):
    """Raised when a commit range cannot be resolved."""


class CheckoutError(GitWalkerError):
    """Raised when a commit cannot be checked out during a walk."""

    def __init__(self, commit: str, cause: Exception):
        super().__init__(f"failed to check out {commit[:12]}: {cause}")
        self.commit = commit
        self.cause = cause


class SpawnError(GitWalkerError):
    """Raised when the validation command cannot be launched.

    commit is filled in by the walker when the launch failed while that
    commit was checked out.
    """

    def __init__(
        self,
        command: str,
        work_dir: str,
        cause: Exception,
        commit: Optional[str] = None,
    ):
        super().__init__(command, work_dir, cause)
        self.command = command
        self.work_dir = work_dir
        self.cause = cause
        self.commit = commit

    def __str__(self) -> str:
        at_commit = f" on commit {self.commit[:12]}" if self.commit else ""
        return (
            f"failed to execute command {self.command}{at_commit}"
            f" at {self.work_dir}: {self.cause}"
        )


class TeardownError(GitWalkerError):
    """Raised when the original branch cannot be restored after a walk."""

    def __init__(self, target: str, cause: Exception):
        super().__init__(f"failed to restore {target}: {cause}")
        self.target = target
        self.cause = cause
