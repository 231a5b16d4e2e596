"""Output archive path resolution.

A release never overwrites a previous one. The first free name in the
sequence `<base>.zip`, `<base>_1.zip`, `<base>_2.zip`, ... is used. Each
run probes from the start again, so a gap left by a deleted archive is
filled by the next run.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from sgpack.core.result import Err, Ok, Result
from sgpack.services.package_errors import OutputPathExhausted

ARCHIVE_SUFFIX = ".zip"


def candidate_paths(directory: Path, base: str, *, limit: int) -> Iterator[Path]:
    """Yield candidate archive paths in probing order.

    The unsuffixed name comes first, followed by `_1` through `_<limit>`.
    """
    yield directory / f"{base}{ARCHIVE_SUFFIX}"
    for n in range(1, limit + 1):
        yield directory / f"{base}_{n}{ARCHIVE_SUFFIX}"


def resolve_output_path(
    directory: Path,
    base: str,
    *,
    limit: int,
) -> Result[Path, OutputPathExhausted]:
    """Return the first candidate path that does not exist yet."""
    for candidate in candidate_paths(directory, base, limit=limit):
        if not candidate.exists():
            return Ok(candidate)
    return Err(OutputPathExhausted(directory=directory, base=base, limit=limit))
