"""Turn a pair of references into the ordered list of commits to visit."""

import logging
from typing import List, Optional

from .errors import ResolutionError
from .git import Git
from .models import Range


class CommitRangeResolver:
    """Resolve ranges against a repository.

    The resolved sequence is oldest first, excludes start, includes end and
    has no duplicates. In merge-base mode the merge base of start and end is
    prepended when the traversal did not already include it.
    """

    def __init__(self, git: Git, logger: Optional[logging.Logger] = None):
        self.git = git
        self.logger = logger or logging.getLogger("git-walker")

    def resolve(self, commit_range: Range) -> List[str]:
        """Resolve a range into commit hashes.

        Raises:
            ResolutionError: If either endpoint is not a commit, or merge-base
                mode is requested for unrelated histories.
        """
        start = self.git.resolve_commit(commit_range.start)
        end = self.git.resolve_commit(commit_range.end)
        if start == end:
            self.logger.debug("Start and end are the same commit, nothing to visit")
            return []

        commits = self.git.rev_list([end], exclude=[start])

        if commit_range.merge_base:
            base = self.git.merge_base(start, end)
            if base is None:
                raise ResolutionError(
                    f"'{commit_range.start}' and '{commit_range.end}' have no merge base"
                )
            self.logger.debug(f"Merge base: {base}")
            if base not in commits:
                commits.insert(0, base)

        return commits
