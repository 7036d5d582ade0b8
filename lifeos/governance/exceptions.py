"""Governance-layer exception hierarchy.

The engine is pure arithmetic and almost never raises: malformed numbers
degrade to defined scores instead.  The exceptions below cover the two
cases that cannot degrade: a broken constitution table and an input
section of an unusable shape.

All governance exceptions inherit from ``GovernanceError`` to enable
blanket ``except GovernanceError`` handling at the calling service layer.
"""

from __future__ import annotations

from typing import Any


class GovernanceError(Exception):
    """Base exception for all governance-layer failures."""

    __slots__ = ()


class ConstitutionError(GovernanceError):
    """Raised when a static constitution table violates an invariant.

    Raised from ``validate_constitution()`` at import time, so a corrupted
    table prevents the engine from loading at all.

    Attributes
    ----------
    invariant : str
        Short identifier for the violated invariant
        (e.g. ``"domain_weights_sum"``).
    """

    __slots__ = ("invariant",)

    def __init__(self, invariant: str, detail: str = "") -> None:
        msg = f"Constitution invariant {invariant!r} violated"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.invariant = invariant


class InputError(GovernanceError):
    """Raised when an input section cannot be read as a record at all.

    Numeric garbage inside a section never raises; only a section that is
    not a mapping (or model) does.

    Attributes
    ----------
    section : str
        Name of the offending section (``"assessment"``, ``"business"``...).
    errors : list[dict[str, Any]]
        Field-level errors as reported by pydantic.
    """

    __slots__ = ("errors", "section")

    def __init__(self, section: str, errors: list[dict[str, Any]]) -> None:
        n = len(errors)
        summary = f"{n} error{'s' if n != 1 else ''}"
        super().__init__(f"Input section {section!r} is unreadable: {summary}")
        self.section = section
        self.errors = errors
