"""Tests for data types and report persistence."""

import json
import os
import tempfile
import unittest
from dataclasses import FrozenInstanceError

from git_walker.models import (
    AtomizationResult,
    Candidate,
    Range,
    RepositorySnapshot,
    ValidationOutcome,
    WalkReport,
)


class TestRange(unittest.TestCase):

    def test_defaults_to_direct_range(self):
        commit_range = Range('v1.0', 'main')
        self.assertFalse(commit_range.merge_base)

    def test_immutable(self):
        """Range cannot be changed once constructed."""
        commit_range = Range('v1.0', 'main')
        with self.assertRaises(FrozenInstanceError):
            commit_range.start = 'v2.0'


class TestRepositorySnapshot(unittest.TestCase):

    def test_detached(self):
        self.assertTrue(RepositorySnapshot(branch=None, commit='abc').detached)
        self.assertFalse(RepositorySnapshot(branch='main', commit='abc').detached)


class TestWalkReport(unittest.TestCase):
    """Tests for WalkReport."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.report_file = os.path.join(self.temp_dir, 'report.json')

    def tearDown(self):
        if os.path.exists(self.report_file):
            os.remove(self.report_file)
        os.rmdir(self.temp_dir)

    def test_create_report(self):
        """A new report is empty and in progress."""
        report = WalkReport(range=Range('a', 'b'))
        self.assertEqual(report.outcomes, [])
        self.assertEqual(report.status, 'in_progress')
        self.assertIsNone(report.atomization)

    def test_counts(self):
        """passed and failed count outcomes."""
        report = WalkReport(range=Range('a', 'b'))
        report.add_outcome(ValidationOutcome('c1', True))
        report.add_outcome(ValidationOutcome('c2', False))
        report.add_outcome(ValidationOutcome('c3', False))

        self.assertEqual(report.passed, 1)
        self.assertEqual(report.failed, 2)

    def test_save(self):
        """The report is written as JSON in visitation order."""
        report = WalkReport(range=Range('v1', 'main', merge_base=True))
        report.add_outcome(ValidationOutcome('c1', True))
        report.add_outcome(ValidationOutcome('c2', False))
        report.status = 'completed'
        report.atomization = AtomizationResult(
            candidates=[],
            open_candidate=Candidate('c1', ['c2']),
        )

        report.save(self.report_file)

        with open(self.report_file) as f:
            data = json.load(f)
        self.assertEqual(data['range'], {'start': 'v1', 'end': 'main', 'merge_base': True})
        self.assertEqual(
            data['outcomes'],
            [{'commit': 'c1', 'passed': True}, {'commit': 'c2', 'passed': False}]
        )
        self.assertEqual(data['status'], 'completed')
        self.assertEqual(
            data['atomization']['open_candidate'],
            {'target_commit': 'c1', 'failing_commits': ['c2']}
        )


if __name__ == '__main__':
    unittest.main()
