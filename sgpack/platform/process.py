"""Subprocess execution with Result-based error handling.

External build tools (git, cargo, dotnet) print their own progress, so
their output streams straight to the terminal. Only the exit status is
inspected. Calls block until the tool exits; there is no timeout.

Usage:
    result = run_silent(["cargo", "build", "--release"], cwd=root)
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from sgpack.core.result import Err, Ok, Result

__all__ = ["ProcessError", "Runner", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it could not start).
        stderr: Launch error details (empty when the tool itself failed).
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


type Runner = Callable[[list[str], Path], Result[None, ProcessError]]


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command without capturing output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)
