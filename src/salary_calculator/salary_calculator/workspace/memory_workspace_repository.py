from __future__ import annotations

import threading
from typing import Callable, Optional

from .model import SalaryWorkspace


def _clone(ws: SalaryWorkspace) -> SalaryWorkspace:
    # Sheets are immutable; only the selection map needs copying.
    return SalaryWorkspace(workspace_id=ws.workspace_id, sheet=ws.sheet, selections=dict(ws.selections))


class InMemoryWorkspaceRepository:
    """Process-local store keyed by workspace id.

    Note: Workspaces are copied in and out so callers never share mutable state.
    """

    def __init__(self):
        self._items: dict[str, SalaryWorkspace] = {}
        self._lock = threading.Lock()

    def get(self, workspace_id: str) -> Optional[SalaryWorkspace]:
        with self._lock:
            ws = self._items.get(workspace_id)
            return _clone(ws) if ws else None

    def save(self, workspace: SalaryWorkspace) -> None:
        with self._lock:
            self._items[workspace.workspace_id] = _clone(workspace)

    def update(
        self, workspace_id: str, change: Callable[[Optional[SalaryWorkspace]], SalaryWorkspace]
    ) -> SalaryWorkspace:
        with self._lock:
            current = self._items.get(workspace_id)
            updated = change(_clone(current) if current else None)
            self._items[workspace_id] = _clone(updated)
            return _clone(updated)

    def delete(self, workspace_id: str) -> bool:
        with self._lock:
            return self._items.pop(workspace_id, None) is not None
