"""Tests for CommitRangeResolver."""

import unittest
from unittest.mock import MagicMock

from git_walker.errors import ResolutionError
from git_walker.git import Git
from git_walker.models import Range
from git_walker.resolver import CommitRangeResolver

from scratch_repo import GIT_AVAILABLE, ScratchRepo


def fake_git(refs, rev_list=(), merge_base=None):
    git = MagicMock(spec=Git)

    def resolve(ref):
        if ref not in refs:
            raise ResolutionError(f"cannot resolve '{ref}' to a commit")
        return refs[ref]

    git.resolve_commit.side_effect = resolve
    git.rev_list.return_value = list(rev_list)
    git.merge_base.return_value = merge_base
    return git


class TestResolverUnit(unittest.TestCase):
    """Resolver behavior against a fake repository."""

    def test_direct_range(self):
        """A direct range lists commits from end excluding start."""
        git = fake_git({'v1': 'a', 'main': 'c'}, rev_list=['b', 'c'])

        result = CommitRangeResolver(git).resolve(Range('v1', 'main'))

        self.assertEqual(result, ['b', 'c'])
        git.rev_list.assert_called_once_with(['c'], exclude=['a'])
        git.merge_base.assert_not_called()

    def test_same_commit_is_empty(self):
        """start == end resolves to nothing without walking history."""
        git = fake_git({'HEAD': 'a', 'main': 'a'})

        result = CommitRangeResolver(git).resolve(Range('HEAD', 'main'))

        self.assertEqual(result, [])
        git.rev_list.assert_not_called()

    def test_unknown_reference(self):
        """An unknown endpoint raises ResolutionError."""
        git = fake_git({'main': 'c'})

        with self.assertRaises(ResolutionError):
            CommitRangeResolver(git).resolve(Range('nope', 'main'))

    def test_merge_base_prepended(self):
        """Merge-base mode puts the merge base first."""
        git = fake_git({'main': 'm', 'feature': 'f2'}, rev_list=['f1', 'f2'], merge_base='base')

        result = CommitRangeResolver(git).resolve(Range('main', 'feature', merge_base=True))

        self.assertEqual(result, ['base', 'f1', 'f2'])

    def test_merge_base_not_duplicated(self):
        """A merge base already in the traversal is not added twice."""
        git = fake_git({'a': 'a', 'c': 'c'}, rev_list=['b', 'c'], merge_base='b')

        result = CommitRangeResolver(git).resolve(Range('a', 'c', merge_base=True))

        self.assertEqual(result, ['b', 'c'])

    def test_merge_base_missing(self):
        """Merge-base mode fails for unrelated histories."""
        git = fake_git({'a': 'a', 'z': 'z'}, rev_list=['z'], merge_base=None)

        with self.assertRaises(ResolutionError):
            CommitRangeResolver(git).resolve(Range('a', 'z', merge_base=True))


@unittest.skipUnless(GIT_AVAILABLE, "git is not installed")
class TestResolverRepository(unittest.TestCase):
    """Resolver behavior against real history.

    History::

        A - B - C ------- M   main
             \\          /
              F1 - F2 ---     feature
    """

    def setUp(self):
        self.repo = ScratchRepo()
        self.a = self.repo.commit("A", {'file.txt': 'a'})
        self.b = self.repo.commit("B", {'file.txt': 'b'})
        self.repo.git('checkout', '-q', '-b', 'feature')
        self.f1 = self.repo.commit("F1", {'feature.txt': '1'})
        self.f2 = self.repo.commit("F2", {'feature.txt': '2'})
        self.repo.git('checkout', '-q', 'main')
        self.c = self.repo.commit("C", {'file.txt': 'c'})
        self.repo.git('tag', 'before-merge')
        self.repo._clock += 60
        self.repo.git('merge', '-q', '--no-ff', '-m', 'M', 'feature')
        self.m = self.repo.head()
        self.resolver = CommitRangeResolver(Git(self.repo.path))

    def tearDown(self):
        self.repo.cleanup()

    def test_linear_range(self):
        """Start is excluded, end is included, oldest first."""
        result = self.resolver.resolve(Range(self.a[:7], 'before-merge'))

        self.assertEqual(result, [self.b, self.c])

    def test_range_through_merge(self):
        """Every commit appears once, after all of its parents."""
        result = self.resolver.resolve(Range(self.a, 'main'))

        self.assertEqual(sorted(result), sorted([self.b, self.c, self.f1, self.f2, self.m]))
        self.assertEqual(result[-1], self.m)
        self.assertLess(result.index(self.b), result.index(self.c))
        self.assertLess(result.index(self.b), result.index(self.f1))
        self.assertLess(result.index(self.f1), result.index(self.f2))

    def test_resolution_is_repeatable(self):
        """Resolving the same range twice gives the same order."""
        commit_range = Range(self.a, 'main')

        self.assertEqual(self.resolver.resolve(commit_range), self.resolver.resolve(commit_range))

    def test_merge_base_range(self):
        """Merge-base mode visits the fork point before the branch commits."""
        result = self.resolver.resolve(Range('before-merge', 'feature', merge_base=True))

        self.assertEqual(result, [self.b, self.f1, self.f2])

    def test_direct_range_across_branches(self):
        """Without merge-base mode only the branch commits are visited."""
        result = self.resolver.resolve(Range('before-merge', 'feature'))

        self.assertEqual(result, [self.f1, self.f2])

    def test_same_commit(self):
        """A range from a commit to itself is empty."""
        self.assertEqual(self.resolver.resolve(Range('main', self.m)), [])

    def test_unknown_reference(self):
        """Unknown references raise ResolutionError."""
        with self.assertRaises(ResolutionError):
            self.resolver.resolve(Range('no-such-branch', 'main'))

    def test_unrelated_histories(self):
        """Merge-base mode fails when there is no common ancestor."""
        self.repo.git('checkout', '-q', '--orphan', 'orphan')
        self.repo.git('rm', '-rqf', '.')
        orphan = self.repo.commit("O", {'orphan.txt': 'o'})

        with self.assertRaises(ResolutionError):
            self.resolver.resolve(Range('main', orphan, merge_base=True))


if __name__ == '__main__':
    unittest.main()
