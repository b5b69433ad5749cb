"""
git-walker - Run a validation command against every commit in a range.

The tool checks out each commit between two references, runs a command in
the working tree, records whether it passed, and puts the repository back
on the branch it started from.
"""

__version__ = "0.1.0"
