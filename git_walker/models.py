"""Data types shared by the resolver, walker and atomization engine."""

import json
from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Range:
    """A pair of unresolved references bounding a walk.

    With merge_base set, the range follows three-dot semantics: the merge
    base of start and end is visited as the oldest commit.
    """
    start: str
    end: str
    merge_base: bool = False


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a single commit."""
    commit: str
    passed: bool


@dataclass
class Candidate:
    """A run of failing commits following the last known-good commit."""
    target_commit: str
    failing_commits: List[str] = field(default_factory=list)


@dataclass
class AtomizationResult:
    """Regression windows found in a walk.

    open_candidate holds failures seen after the last good commit that no
    later good commit bounded.
    """
    candidates: List[Candidate] = field(default_factory=list)
    open_candidate: Optional[Candidate] = None


@dataclass(frozen=True)
class RepositorySnapshot:
    """Where HEAD was before a walk started."""
    branch: Optional[str]
    commit: Optional[str]

    @property
    def detached(self) -> bool:
        return self.branch is None


@dataclass
class WalkReport:
    """Outcomes of a walk, in visitation order."""
    range: Range
    outcomes: List[ValidationOutcome] = field(default_factory=list)
    status: str = "in_progress"  # "in_progress", "completed", "aborted"
    atomization: Optional[AtomizationResult] = None

    def add_outcome(self, outcome: ValidationOutcome):
        """Record the outcome of the most recently visited commit."""
        self.outcomes.append(outcome)

    @property
    def passed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.passed)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.passed

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str):
        """Save the report to a JSON file.

        Args:
            path: Path to write the report to.
        """
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
