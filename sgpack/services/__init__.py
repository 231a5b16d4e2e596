"""Packaging services: output naming, staging and the release sequence."""

from sgpack.services.output_path import candidate_paths, resolve_output_path
from sgpack.services.packager import STEP_COUNT, PackageResult, ReleasePackager
from sgpack.services.staging import StagingLayout, reset_staging_tree

__all__ = [
    "candidate_paths",
    "resolve_output_path",
    "STEP_COUNT",
    "PackageResult",
    "ReleasePackager",
    "StagingLayout",
    "reset_staging_tree",
]
