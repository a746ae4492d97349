"""
Outcome of a database readiness check.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class VerificationResult:
    """
    Result of one verify run.

    Attributes:
        verified: Whether the sentinel query eventually succeeded
        attempts: Number of connection attempts made
        waits_ms: Backoff waits slept between attempts, in order
        elapsed_ms: Time since the first attempt when the run finished
        last_error: Message of the last failed attempt, if any
        skipped: True when verification is disabled by configuration
    """
    verified: bool = False
    attempts: int = 0
    waits_ms: List[int] = field(default_factory=list)
    elapsed_ms: int = 0
    last_error: Optional[str] = None
    skipped: bool = False
