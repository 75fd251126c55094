from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import DayStrategyFactory
from .attendance.ingestor import SheetIngestor
from .attendance.service import AttendanceClassifier
from .core.policy import DEFAULT_POLICY, OfficePolicy
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.service import PayrollReportService
from .workspace.memory_workspace_repository import InMemoryWorkspaceRepository
from .workspace.service import WorkspaceService


@dataclass(frozen=True)
class Container:
    policy: OfficePolicy

    workspaces_repo: InMemoryWorkspaceRepository

    classifier: AttendanceClassifier
    payroll_report_service: PayrollReportService
    workspace_service: WorkspaceService


def build_container(*, policy: Optional[OfficePolicy] = None) -> Container:
    policy = policy or DEFAULT_POLICY

    workspaces_repo = InMemoryWorkspaceRepository()

    classifier = AttendanceClassifier(strategy_factory=DayStrategyFactory(), policy=policy)
    payroll_report_service = PayrollReportService(calculator=StandardSalaryCalculator(policy), policy=policy)
    workspace_service = WorkspaceService(
        workspaces_repo,
        ingestor=SheetIngestor(),
        classifier=classifier,
        reports=payroll_report_service,
        policy=policy,
    )

    return Container(
        policy=policy,
        workspaces_repo=workspaces_repo,
        classifier=classifier,
        payroll_report_service=payroll_report_service,
        workspace_service=workspace_service,
    )
