"""Layer: one entry of the hub's context stack."""

from __future__ import annotations

from dataclasses import dataclass

from capture_hub.core.interfaces import IClient
from capture_hub.scope import Scope


@dataclass
class Layer:
    """Pairs a bound client reference with the scope it owns.

    ``client`` is externally owned and may be ``None`` (captures become
    no-ops).  ``scope`` is never ``None`` once the layer is on a stack.
    """

    scope: Scope
    client: IClient | None = None
