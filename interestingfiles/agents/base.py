"""BaseAgent ABC for host-loaded export modules.

A host loads an agent, calls initialize() once with its argument string,
run() once per report cycle, and finalize() at shutdown.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from interestingfiles.models.export import ExportOutcome

if TYPE_CHECKING:
    from interestingfiles.models.pipeline import ExportContext

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Abstract base class for host-loaded modules.

    Subclasses identify themselves through ``name``, ``description`` and
    ``version`` and implement run().
    """

    name: str = "BaseAgent"
    description: str = ""
    version: str = "0.0.0"

    def initialize(self, arguments: Optional[str] = None) -> str:
        """Receive the host's argument string. Safe to call more than once.

        Returns:
            ExportOutcome.SUCCESS unless the arguments are unusable.
        """
        return ExportOutcome.SUCCESS

    @abstractmethod
    def run(self, context: "ExportContext") -> Any:
        """Execute the agent and return a typed result.

        Args:
            context: Run context with configuration, store, and hit source.
        """

    def finalize(self) -> str:
        """Release anything acquired in initialize() or run()."""
        return ExportOutcome.SUCCESS

    def _run_timed(self, context: "ExportContext") -> Any:
        """Execute run() and log elapsed time."""
        start = time.monotonic()
        try:
            result = self.run(context)
            elapsed = time.monotonic() - start
            logger.info(
                "Agent %s completed in %.2fs (outcome=%s)",
                self.name,
                elapsed,
                getattr(result, "outcome", "?"),
            )
            return result
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "Agent %s failed after %.2fs: %s",
                self.name,
                elapsed,
                exc,
                exc_info=True,
            )
            raise
