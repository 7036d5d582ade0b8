"""Audit sinks — where audit entries are written.

A sink failing must never break decision processing:
``record_pipeline_audit`` logs the failure and reports it through its
return value instead of raising.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lifeos.audit.trail import AuditEntry, build_audit_trail

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lifeos.governance.inputs import GovernanceRequest
    from lifeos.governance.pipeline import GovernanceResult

log = logging.getLogger(__name__)

__all__ = [
    "AuditSink",
    "InMemoryAuditSink",
    "LoggingAuditSink",
    "record_pipeline_audit",
]


@runtime_checkable
class AuditSink(Protocol):
    """Anything that can persist a batch of audit entries."""

    def write(self, entries: Sequence[AuditEntry]) -> None: ...


class InMemoryAuditSink:
    """Append-only in-process sink.

    Entries can be read back but never changed or removed.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    def write(self, entries: Sequence[AuditEntry]) -> None:
        self._entries.extend(entries)

    @property
    def entries(self) -> tuple[AuditEntry, ...]:
        return tuple(self._entries)

    def for_pipeline(self, pipeline_id: str) -> tuple[AuditEntry, ...]:
        return tuple(e for e in self._entries if e.pipeline_id == pipeline_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"InMemoryAuditSink(entries={len(self._entries)})"


class LoggingAuditSink:
    """Emit one JSON line per entry on a named logger."""

    __slots__ = ("_logger", "_level")

    def __init__(self, logger_name: str = "lifeos.audit", level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(logger_name)
        self._level = level

    def write(self, entries: Sequence[AuditEntry]) -> None:
        for entry in entries:
            self._logger.log(
                self._level,
                json.dumps(entry.as_dict(), ensure_ascii=False, sort_keys=True),
            )


def record_pipeline_audit(
    sink: AuditSink,
    user_id: str,
    request: GovernanceRequest,
    result: GovernanceResult,
) -> bool:
    """Build the audit trail for *result* and flush it to *sink* in one batch.

    Returns:
        True if the sink accepted the batch, False if it failed.
    """
    entries = build_audit_trail(user_id, request, result)
    try:
        sink.write(entries)
    except Exception:
        log.exception(
            "Audit sink %r failed for pipeline %s (%d entries dropped)",
            sink,
            result.pipeline_id,
            len(entries),
        )
        return False
    log.debug("Recorded %d audit entries for pipeline %s", len(entries), result.pipeline_id)
    return True
