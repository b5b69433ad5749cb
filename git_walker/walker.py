"""Check out each commit of a range in turn and hand it to a callback."""

import logging
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional

from .errors import (
    CheckoutError,
    DirtyRepositoryError,
    GitError,
    GitWalkerError,
    SpawnError,
    TeardownError,
)
from .git import Git
from .models import RepositorySnapshot

Visitor = Callable[[str], bool]


class RepositoryWalker:
    """Walk commits in the repository's single working tree.

    The walker owns HEAD and the working tree for the duration of walk().
    Whatever happens inside the walk, HEAD is put back where it was: on the
    original branch tip, or detached at the original commit.
    """

    def __init__(self, git: Git, logger: Optional[logging.Logger] = None):
        self.git = git
        self.logger = logger or logging.getLogger("git-walker")

    def ensure_clean(self):
        """Fail unless the repository is safe to walk.

        Raises:
            DirtyRepositoryError: If tracked files are modified or a git
                operation is unfinished.
        """
        operation = self.git.operation_in_progress()
        if operation:
            raise DirtyRepositoryError(
                f"a {operation} is in progress, finish or abort it before walking"
            )
        if not self.git.is_clean():
            raise DirtyRepositoryError(
                "repository is not clean, commit any changes before walking"
            )

    def snapshot(self) -> RepositorySnapshot:
        """Record the branch and commit HEAD currently points at."""
        return RepositorySnapshot(
            branch=self.git.current_branch(),
            commit=self.git.head_commit(),
        )

    def restore(self, snapshot: RepositorySnapshot):
        """Return HEAD and the working tree to a recorded snapshot.

        Raises:
            TeardownError: If the checkout fails.
        """
        if not snapshot.detached:
            target = snapshot.branch
            self.logger.info(f"Restoring branch {target}")
            restore = self.git.checkout_branch
        elif snapshot.commit:
            target = snapshot.commit
            self.logger.info(f"Restoring detached HEAD at {target[:12]}")
            restore = self.git.checkout_detached
        else:
            return

        try:
            restore(target)
        except GitError as e:
            raise TeardownError(target, e) from e

    @contextmanager
    def restoring(self, snapshot: RepositorySnapshot) -> Iterator[RepositorySnapshot]:
        """Restore the snapshot on every exit path of the managed block.

        When both the block and the restore fail, the block's exception
        propagates and the restore failure is attached to it as
        ``teardown_error``.
        """
        try:
            yield snapshot
        except BaseException as exc:
            try:
                self.restore(snapshot)
            except TeardownError as teardown_exc:
                if isinstance(exc, GitWalkerError):
                    exc.teardown_error = teardown_exc
                else:
                    self.logger.error(str(teardown_exc))
            raise
        self.restore(snapshot)

    def checkout(self, commit: str):
        """Detach HEAD at a commit and make the working tree match it.

        Raises:
            CheckoutError: If either step fails.
        """
        try:
            self.git.checkout_detached(commit)
            self.git.reset_hard(commit)
        except GitError as e:
            raise CheckoutError(commit, e) from e

    def walk(self, commits: Iterable[str], visit: Visitor):
        """Visit commits in order, one checkout at a time.

        Args:
            commits: Commit hashes in visitation order.
            visit: Called with each commit hash once it is checked out.
                Returning False stops the walk; raising aborts it.

        Raises:
            DirtyRepositoryError: Before any checkout, if the repository has
                uncommitted changes.
            CheckoutError: If a commit cannot be checked out.
            SpawnError: If visit cannot launch its command; the error names
                the commit that was checked out.
        """
        self.ensure_clean()
        commits = list(commits)
        if not commits:
            self.logger.info("No commits to visit")
            return

        with self.restoring(self.snapshot()):
            for commit in commits:
                self.logger.debug(f"Checking out {commit[:12]}")
                self.checkout(commit)
                try:
                    keep_going = visit(commit)
                except SpawnError as e:
                    if e.commit is None:
                        e.commit = commit
                    raise
                if not keep_going:
                    self.logger.info(f"Walk stopped after {commit[:12]}")
                    break
