"""
Record of what a best-effort teardown did and which errors it swallowed.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class CleanupError:
    """An error swallowed during cleanup."""
    step: str
    message: str


@dataclass
class CleanupReport:
    """
    Result of stopping the test database.

    Attributes:
        container_found: Whether a container with the configured name existed
        completed_steps: Steps that finished without error, in order
        errors: Errors raised by steps and swallowed
    """
    container_found: bool = False
    completed_steps: List[str] = field(default_factory=list)
    errors: List[CleanupError] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """True when no step failed."""
        return not self.errors

    def record_success(self, step: str) -> None:
        self.completed_steps.append(step)

    def record_error(self, step: str, error: Exception) -> None:
        self.errors.append(CleanupError(step=step, message=str(error)))
