"""Append-only audit trail of governance evaluations."""

from __future__ import annotations

from lifeos.audit.sinks import (
    AuditSink,
    InMemoryAuditSink,
    LoggingAuditSink,
    record_pipeline_audit,
)
from lifeos.audit.trail import AuditEntry, AuditEventType, build_audit_trail

__all__ = [
    "AuditEntry",
    "AuditEventType",
    "AuditSink",
    "InMemoryAuditSink",
    "LoggingAuditSink",
    "build_audit_trail",
    "record_pipeline_audit",
]
