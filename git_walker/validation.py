"""Run the validation command against a checked out working tree."""

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import SpawnError


@dataclass(frozen=True)
class Command:
    """A validation command and its arguments."""
    program: str
    args: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str, extra_args: Optional[List[str]] = None) -> 'Command':
        """Split a command string into program and arguments.

        Args:
            text: Command line, e.g. ``"python3 test.py"``.
            extra_args: Arguments appended after those found in text.

        Raises:
            ValueError: If the command is empty.
        """
        parts = shlex.split(text)
        if not parts:
            raise ValueError("empty command")
        return cls(program=parts[0], args=parts[1:] + list(extra_args or []))

    def __str__(self) -> str:
        return shlex.join([self.program] + self.args)


class ValidationRunner:
    """Run a command and report whether it exited successfully."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("git-walker")

    def run(self, work_dir: str, command: str, args: List[str], silent: bool) -> bool:
        """Run command in work_dir.

        Args:
            work_dir: Directory the command runs in.
            command: Program to execute.
            args: Arguments for the program.
            silent: Discard the command's stdout instead of passing it through.

        Returns:
            True if the command exited with status zero, False otherwise.

        Raises:
            SpawnError: If the command cannot be launched at all.
        """
        self.logger.debug(f"Running validation: {shlex.join([command] + list(args))}")
        try:
            result = subprocess.run(
                [command] + list(args),
                cwd=work_dir,
                stdout=subprocess.DEVNULL if silent else None,
            )
        except OSError as e:
            raise SpawnError(command, work_dir, e) from e

        self.logger.debug(f"Exit code: {result.returncode}")
        return result.returncode == 0

    def run_command(self, work_dir: str, command: Command, silent: bool) -> bool:
        """Run a parsed Command in work_dir."""
        return self.run(work_dir, command.program, command.args, silent)
