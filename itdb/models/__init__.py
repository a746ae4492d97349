"""Value objects shared by the integration-test database managers."""

from .cleanup_report import CleanupError, CleanupReport
from .connection_parameters import ConnectionParameters
from .verification import VerificationResult

__all__ = ['ConnectionParameters', 'CleanupReport', 'CleanupError', 'VerificationResult']
