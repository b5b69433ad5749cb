"""Run configuration for git-walker.

The CLI builds a WalkConfig and passes it to WalkSession, so nothing below
the CLI reads arguments or global state.
"""

from dataclasses import dataclass
from typing import Optional

from .models import Range
from .validation import Command


@dataclass
class WalkConfig:
    """Everything a walk needs to run."""

    repo_path: str
    range: Range
    command: Command
    verbose: bool = False
    atomize: bool = False
    report_path: Optional[str] = None

    @property
    def silent(self) -> bool:
        """Whether the validation command's stdout is discarded."""
        return not self.verbose
