"""LifeOS — deterministic decision governance.

The engine lives in :mod:`lifeos.governance`; :mod:`lifeos.audit` turns a
governance result into an append-only audit trail and :mod:`lifeos.cli`
exposes both on the command line.
"""

from __future__ import annotations

__version__ = "0.4.0"
