from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import SalaryWorkspace


class WorkspaceRepository(Protocol):
    def get(self, workspace_id: str) -> Optional[SalaryWorkspace]:
        raise NotImplementedError

    def save(self, workspace: SalaryWorkspace) -> None:
        raise NotImplementedError

    def update(
        self, workspace_id: str, change: Callable[[Optional[SalaryWorkspace]], SalaryWorkspace]
    ) -> SalaryWorkspace:
        """Read, change and store one workspace atomically; errors raised by ``change`` leave it untouched."""
        raise NotImplementedError

    def delete(self, workspace_id: str) -> bool:
        raise NotImplementedError
