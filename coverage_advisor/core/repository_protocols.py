"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell
    - Audit storage accessed only through the AuditSink Protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no inheritance
    - Async in Protocol: implementations do IO, but the validator and engine that
      run before the write are never async themselves
"""

from typing import Protocol

from coverage_advisor.core.domain_types import AuditRecord, AuditRecordId


class AuditSink(Protocol):
    """Append-only storage for audit records, implemented by shell.

    append() returns the storage-assigned id and raises PersistenceError on
    any failure. Records are never read back by this service.
    """
    async def append(self, record: AuditRecord) -> AuditRecordId: ...
