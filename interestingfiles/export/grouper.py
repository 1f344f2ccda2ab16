"""Set grouper — partition hit records by rule-set name."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from interestingfiles.models.entities import Hit, HitRecord
from interestingfiles.models.export import RuleSetDescriptor

logger = logging.getLogger(__name__)


@dataclass
class GroupedHits:
    """Rule-set descriptors and their hits, keyed by rule-set name."""

    descriptors: Dict[str, RuleSetDescriptor] = field(default_factory=dict)
    hits: Dict[str, List[Hit]] = field(default_factory=dict)
    malformed: List[int] = field(default_factory=list)   # artifact ids

    def set_names(self) -> List[str]:
        """Rule-set names in ascending order."""
        return sorted(self.descriptors)

    def hits_for(self, set_name: str) -> List[Hit]:
        return self.hits.get(set_name, [])


def group_hits(records: Iterable[HitRecord]) -> GroupedHits:
    """Group hit records by the rule-set name they carry.

    The first description seen for a name is kept. A record carrying several
    set-name attributes joins each of those sets. A record with none is logged
    and skipped.

    Args:
        records: Annotation records from the hit source.

    Returns:
        GroupedHits; hits within a set keep the order of ``records``.
    """
    grouped = GroupedHits()

    for record in records:
        attrs = record.set_name_attributes()
        if not attrs:
            logger.warning(
                "Hit record %d (object %d) has no set name attribute, skipped",
                record.artifact_id,
                record.object_id,
            )
            grouped.malformed.append(record.artifact_id)
            continue

        for attr in attrs:
            name = attr.value
            if name not in grouped.descriptors:
                grouped.descriptors[name] = RuleSetDescriptor(name=name, description=attr.context)
            grouped.hits.setdefault(name, []).append(
                Hit(rule_set_name=name, file_id=record.object_id, artifact_id=record.artifact_id)
            )

    logger.debug(
        "Grouped hits into %d rule-sets (%d malformed records)",
        len(grouped.descriptors),
        len(grouped.malformed),
    )
    return grouped
