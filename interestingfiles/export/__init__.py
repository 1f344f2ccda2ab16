"""Export engine: grouping, naming, copying, and manifests."""

from interestingfiles.export.directory_exporter import export_directory
from interestingfiles.export.file_exporter import copy_file_into, export_file
from interestingfiles.export.grouper import GroupedHits, group_hits
from interestingfiles.export.manifest import Manifest, load_manifest
from interestingfiles.export.naming import unique_file_name, wrapper_dir_name
from interestingfiles.export.orchestrator import ExportOrchestrator

__all__ = [
    "ExportOrchestrator",
    "GroupedHits",
    "Manifest",
    "copy_file_into",
    "export_directory",
    "export_file",
    "group_hits",
    "load_manifest",
    "unique_file_name",
    "wrapper_dir_name",
]
