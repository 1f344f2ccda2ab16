"""Export orchestrator — drive the export of every rule-set.

For each rule-set, in ascending name order:
  1. create ``<output_root>/<set name>/``
  2. export each hit (directory or file), isolating failures per hit
  3. write ``<set name>.manifest`` describing everything that was saved

Failure scopes:
  - output root cannot be created      → ExportError, nothing exported
  - set folder cannot be created       → set skipped, run continues
  - a hit fails (at any nesting depth,
    for any reason)                    → hit recorded as failed, run continues
  - a manifest cannot be written       → ExportError carrying the partial
                                         result, no further sets start

Nothing already written is rolled back.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional

from config.settings import ExportConfig
from interestingfiles.errors import ExportError, ExportErrorKind
from interestingfiles.export.directory_exporter import export_directory
from interestingfiles.export.file_exporter import export_file
from interestingfiles.export.grouper import GroupedHits, group_hits
from interestingfiles.export.manifest import Manifest
from interestingfiles.export.naming import child_path
from interestingfiles.io.persistence import ensure_directory
from interestingfiles.models.entities import Hit
from interestingfiles.models.export import (
    ExportResult,
    HitFailure,
    RuleSetDescriptor,
    SetExportResult,
)
from interestingfiles.stores.base import EntityStore, HitSource
from interestingfiles.utils.logging_utils import get_set_logger

logger = logging.getLogger(__name__)


class ExportOrchestrator:
    """Export all flagged items of a case, one rule-set folder at a time.

    Args:
        store: Case entity store.
        hit_source: Source of annotation records.
        config: Engine limits and manifest naming; defaults to ExportConfig().
        should_stop: Polled before each hit. When it returns True the current
            set's manifest is still written and no further sets are started.
    """

    def __init__(
        self,
        store: EntityStore,
        hit_source: HitSource,
        config: Optional[ExportConfig] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.store = store
        self.hit_source = hit_source
        self.config = config or ExportConfig()
        self._should_stop = should_stop or (lambda: False)

    def export(self, output_root: str | Path) -> ExportResult:
        """Export every rule-set under ``output_root``.

        Returns:
            ExportResult whose outcome is SUCCESS only if every hit exported.

        Raises:
            ExportError: DIRECTORY_CREATE_FAILED if the output root cannot be
                created, MANIFEST_WRITE_FAILED if a manifest cannot be written.
                In the latter case ``error.result`` holds the sets exported so
                far, the failing set included.
        """
        root = Path(output_root)
        try:
            ensure_directory(root)
        except OSError as exc:
            raise ExportError(
                ExportErrorKind.DIRECTORY_CREATE_FAILED,
                f"failed to create output directory '{root}': {exc}",
            ) from exc

        grouped = group_hits(self.hit_source.get_hit_records())
        result = ExportResult(output_root=str(root), malformed_hits=list(grouped.malformed))
        names = grouped.set_names()
        logger.info("Exporting %d rule-sets to %s", len(names), root)

        if self.config.max_workers > 1 and len(names) > 1:
            set_results = self._export_parallel(root, grouped, names)
        else:
            set_results = []
            for name in names:
                set_result = self._export_set(root, grouped.descriptors[name], grouped.hits_for(name))
                set_results.append(set_result)
                if set_result.interrupted or set_result.fatal is not None:
                    break

        fatal = None
        for set_result in set_results:
            result.sets.append(set_result)
            result.failures.extend(set_result.failures)
            if set_result.interrupted:
                result.interrupted = True
            if fatal is None:
                fatal = set_result.fatal
        if result.failures or result.interrupted:
            result.mark_failed()

        logger.info(
            "Export finished: %d sets, %d failures, %d malformed hit records | outcome=%s",
            len(result.sets),
            len(result.failures),
            len(result.malformed_hits),
            result.outcome,
        )
        if fatal is not None:
            fatal.result = result
            raise fatal
        return result

    def _export_parallel(
        self, root: Path, grouped: GroupedHits, names: List[str]
    ) -> List[SetExportResult]:
        # Each set owns its folder and manifest; results come back in name order
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                executor.submit(
                    self._export_set, root, grouped.descriptors[name], grouped.hits_for(name)
                )
                for name in names
            ]
            return [future.result() for future in futures]

    def _export_set(
        self,
        root: Path,
        descriptor: RuleSetDescriptor,
        hits: List[Hit],
    ) -> SetExportResult:
        name = descriptor.name
        log = get_set_logger(__name__, name)
        set_result = SetExportResult(
            name=name, description=descriptor.description, hits_total=len(hits)
        )

        try:
            folder = child_path(root, name, ExportErrorKind.DIRECTORY_CREATE_FAILED)
            ensure_directory(folder)
        except (ExportError, OSError) as exc:
            kind = exc.kind if isinstance(exc, ExportError) else ExportErrorKind.DIRECTORY_CREATE_FAILED
            log.error("failed to create set folder, set skipped: %s", exc)
            set_result.failures.append(HitFailure(name, None, kind, str(exc)))
            return set_result

        set_result.folder = str(folder)
        manifest = Manifest(name, descriptor.description)
        log.info("exporting %d hits to %s", len(hits), folder)

        for hit in hits:
            if self._should_stop():
                log.warning("stop requested; remaining hits in this set are skipped")
                set_result.interrupted = True
                break
            try:
                self._export_hit(hit, folder, manifest)
                set_result.hits_exported += 1
            except ExportError as exc:
                log.error("failed to export entity %d: %s", hit.file_id, exc)
                set_result.failures.append(HitFailure(name, hit.file_id, exc.kind, str(exc)))
            except Exception as exc:
                log.error("unexpected error exporting entity %d: %s", hit.file_id, exc, exc_info=True)
                set_result.failures.append(
                    HitFailure(name, hit.file_id, ExportErrorKind.UNEXPECTED, f"{type(exc).__name__}: {exc}")
                )

        manifest_path = folder / f"{name}{self.config.manifest_suffix}"
        try:
            manifest.serialize(manifest_path)
        except ExportError as exc:
            log.error("manifest not written, run stops after this set: %s", exc)
            set_result.failures.append(HitFailure(name, None, exc.kind, str(exc)))
            set_result.fatal = exc
            return set_result
        set_result.manifest_path = str(manifest_path)
        set_result.entries_written = len(manifest)
        return set_result

    def _export_hit(self, hit: Hit, folder: Path, manifest: Manifest) -> None:
        try:
            entity = self.store.get_entity(hit.file_id)
        except KeyError as exc:
            raise ExportError(
                ExportErrorKind.ENTITY_NOT_FOUND,
                f"no entity with id {hit.file_id} in the case store",
                hit.file_id,
            ) from exc

        try:
            if entity.is_directory:
                export_directory(
                    self.store, entity, folder, manifest, self.config.max_directory_depth
                )
            else:
                export_file(self.store, entity, folder, manifest)
        except OSError as exc:
            # Listing children can fail in the store itself
            raise ExportError(
                ExportErrorKind.FILE_COPY_FAILED,
                f"store error while exporting '{entity.path}': {exc}",
                entity.id,
            ) from exc
