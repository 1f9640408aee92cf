"""
External command runner.

Runs a command to completion with stdout sent to a caller-supplied file and
stderr discarded. Returns the exit status.
"""

import subprocess
from typing import BinaryIO, Callable

# (command, stdout sink) -> exit status. Raises OSError if the command can't start.
CommandRunner = Callable[[list[str], BinaryIO], int]


def run_command(cmd: list[str], sink: BinaryIO) -> int:
    """Run cmd, streaming its stdout directly into sink.

    Args:
        cmd: Command and arguments
        sink: Open binary file receiving the process's standard output

    Returns:
        The process exit status

    Raises:
        OSError: If the executable cannot be launched
    """
    completed = subprocess.run(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=sink,
        stderr=subprocess.DEVNULL,
        check=False,
    )
    return completed.returncode
