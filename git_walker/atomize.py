"""Group per-commit outcomes into candidate regression windows."""

from typing import Iterable, List, Optional

from .models import AtomizationResult, Candidate, ValidationOutcome


class AtomizationEngine:
    """Accumulate outcomes of a single walk, in visitation order.

    Each maximal run of failures preceded by a passing commit becomes a
    Candidate targeting that passing commit. Failures seen before any
    passing commit have nothing to compare against and are dropped.
    """

    def __init__(self):
        self.last_good: Optional[str] = None
        self.failing_since_last_good: List[str] = []
        self.candidates: List[Candidate] = []

    @property
    def has_baseline(self) -> bool:
        return self.last_good is not None

    def record(self, commit: str, passed: bool):
        """Feed the outcome of the next visited commit."""
        if passed:
            if self.failing_since_last_good:
                self.candidates.append(Candidate(
                    target_commit=self.last_good,
                    failing_commits=self.failing_since_last_good,
                ))
            self.last_good = commit
            self.failing_since_last_good = []
        elif self.has_baseline:
            self.failing_since_last_good.append(commit)

    def add_outcome(self, outcome: ValidationOutcome):
        self.record(outcome.commit, outcome.passed)

    def result(self) -> AtomizationResult:
        """Read out closed candidates and the open trailing run, if any."""
        open_candidate = None
        if self.failing_since_last_good:
            open_candidate = Candidate(
                target_commit=self.last_good,
                failing_commits=list(self.failing_since_last_good),
            )
        candidates = [
            Candidate(
                target_commit=candidate.target_commit,
                failing_commits=list(candidate.failing_commits),
            )
            for candidate in self.candidates
        ]
        return AtomizationResult(candidates=candidates, open_candidate=open_candidate)


def atomize(outcomes: Iterable[ValidationOutcome]) -> AtomizationResult:
    """Run a fresh engine over outcomes and return its result."""
    engine = AtomizationEngine()
    for outcome in outcomes:
        engine.add_outcome(outcome)
    return engine.result()
