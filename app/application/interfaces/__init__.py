"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import IActivityLogRepository
from app.application.interfaces.services import IActivityLogWriter, IActivitySink

__all__ = [
    "IActivityLogRepository",
    "IActivityLogWriter",
    "IActivitySink",
]
