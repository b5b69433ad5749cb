"""Git command wrapper with logging."""

import logging
import os
import subprocess
from typing import Iterable, List, Optional

from .errors import GitError, ResolutionError

# Marker files and directories git leaves behind for unfinished operations.
_IN_PROGRESS_MARKERS = (
    ("MERGE_HEAD", "merge"),
    ("rebase-merge", "rebase"),
    ("rebase-apply", "rebase"),
    ("CHERRY_PICK_HEAD", "cherry-pick"),
    ("REVERT_HEAD", "revert"),
    ("BISECT_LOG", "bisect"),
)


class Git:
    """Git command wrapper bound to a single repository."""

    def __init__(self, repo_path: str, logger: Optional[logging.Logger] = None):
        """Initialize Git wrapper.

        Args:
            repo_path: Path to the git repository.
            logger: Optional logger instance. If not provided, uses module logger.
        """
        self.repo_path = repo_path
        self.logger = logger or logging.getLogger("git-walker")

    def run(self, *args, check: bool = True) -> subprocess.CompletedProcess:
        """Run a git command in the repository.

        Args:
            *args: Git command arguments.
            check: Whether to raise exception on non-zero exit.

        Returns:
            CompletedProcess instance with command results.

        Raises:
            GitError: If git cannot be launched, or the command fails and
                check=True.
        """
        cmd = ["git", "-C", self.repo_path] + list(args)
        self.logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=check
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            self.logger.debug(f"stderr: {stderr}")
            raise GitError(f"git command failed: {' '.join(cmd)}: {stderr}")
        except OSError as e:
            raise GitError(f"failed to execute git: {e}")

        if result.stdout:
            self.logger.debug(f"stdout: {result.stdout.strip()}")
        return result

    def resolve_commit(self, ref: str) -> str:
        """Resolve a reference to a full commit hash.

        Raises:
            ResolutionError: If the reference does not name a commit.
        """
        result = self.run(
            "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}",
            check=False
        )
        if result.returncode != 0 or not result.stdout.strip():
            raise ResolutionError(f"cannot resolve '{ref}' to a commit")
        return result.stdout.strip()

    def is_clean(self) -> bool:
        """Check that tracked files carry no staged or unstaged changes."""
        result = self.run("status", "--porcelain", "--untracked-files=no")
        return not result.stdout.strip()

    def operation_in_progress(self) -> Optional[str]:
        """Return the name of an unfinished git operation, if any."""
        git_dir = self.run("rev-parse", "--absolute-git-dir").stdout.strip()
        for marker, operation in _IN_PROGRESS_MARKERS:
            if os.path.exists(os.path.join(git_dir, marker)):
                return operation
        return None

    def current_branch(self) -> Optional[str]:
        """Get the checked out branch name, or None when HEAD is detached."""
        result = self.run("symbolic-ref", "--quiet", "--short", "HEAD", check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def head_commit(self) -> Optional[str]:
        """Get the commit HEAD points at, or None on an unborn branch."""
        result = self.run("rev-parse", "--verify", "--quiet", "HEAD", check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def rev_list(self, include: Iterable[str], exclude: Iterable[str] = ()) -> List[str]:
        """List commits reachable from include but not from exclude.

        Commits are ordered oldest first; parents always precede their
        children and unrelated commits follow commit timestamp order.
        """
        args = ["rev-list", "--date-order", "--reverse"]
        args += list(include)
        args += [f"^{commit}" for commit in exclude]
        result = self.run(*args)
        return [line for line in result.stdout.splitlines() if line]

    def merge_base(self, first: str, second: str) -> Optional[str]:
        """Get the best common ancestor of two commits.

        Returns:
            The merge base hash, or None when the histories are unrelated.
        """
        result = self.run("merge-base", first, second, check=False)
        if result.returncode == 1:
            return None
        if result.returncode != 0:
            raise GitError(
                f"git merge-base {first} {second} failed: {result.stderr.strip()}"
            )
        return result.stdout.strip()

    def checkout_detached(self, commit: str):
        """Point HEAD directly at a commit and check out its tree."""
        self.run("checkout", "--quiet", "--force", "--detach", commit)

    def reset_hard(self, commit: str):
        """Make the index and working tree match a commit exactly."""
        self.run("reset", "--quiet", "--hard", commit)

    def checkout_branch(self, branch: str):
        """Check out a branch tip and reattach HEAD to the branch."""
        self.run("checkout", "--quiet", "--force", branch, "--")

    def get_commit_message(self, commit: str) -> str:
        """Get the full commit message for a commit."""
        result = self.run("log", "-1", "--format=%B", commit)
        return result.stdout
