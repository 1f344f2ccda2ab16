"""Case store implementations.

The engine talks to stores only through EntityStore and HitSource.
"""

from interestingfiles.stores.base import EntityStore, HitSource
from interestingfiles.stores.case_file import CaseFileError, CaseFileStore
from interestingfiles.stores.memory import InMemoryCaseStore

__all__ = [
    "EntityStore",
    "HitSource",
    "CaseFileError",
    "CaseFileStore",
    "InMemoryCaseStore",
]
