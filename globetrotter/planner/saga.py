from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class CompensatingAction:
    """Undo for a completed step, expressed as the API call that reverses it."""
    description: str
    method: str
    path: str


@dataclass
class StepRecord:
    name: str
    result: Any = None
    compensation: Optional[CompensatingAction] = None


@dataclass
class SagaLog:
    steps: List[StepRecord] = field(default_factory=list)

    def record(self, name: str, result: Any = None, compensation: Optional[CompensatingAction] = None) -> None:
        self.steps.append(StepRecord(name, result, compensation))

    def pending_compensations(self) -> List[CompensatingAction]:
        # undo in reverse completion order
        return [s.compensation for s in reversed(self.steps) if s.compensation]


class PlanningError(Exception):
    def __init__(self, failed_step: str, cause: Exception, log: SagaLog):
        self.failed_step = failed_step
        self.cause = cause
        self.completed_steps = [s.name for s in log.steps]
        self.compensations = log.pending_compensations()
        self.compensation_failures: List[CompensatingAction] = []
        super().__init__(f"Trip planning failed at {failed_step}: {cause}")
