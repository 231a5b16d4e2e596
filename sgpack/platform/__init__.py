"""Platform abstraction layer."""

from .files import FileError, copy_file, remove_tree
from .process import ProcessError, Runner, run_silent

__all__ = [
    # files
    "FileError",
    "copy_file",
    "remove_tree",
    # process
    "ProcessError",
    "Runner",
    "run_silent",
]
