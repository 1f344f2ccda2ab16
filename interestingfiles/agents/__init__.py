"""Interesting Files Export agents package.

Agents wrap the export engine in the host's initialize/run/finalize lifecycle.
"""

from interestingfiles.agents.base import BaseAgent
from interestingfiles.agents.save_agent import SaveInterestingFilesAgent

__all__ = [
    "BaseAgent",
    "SaveInterestingFilesAgent",
]
