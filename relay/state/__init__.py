from .launch import LaunchConfig
from .runtime import RuntimeDeps
from .phase import SessionPhase
from .events import ConnectionEvent
from .session import SessionState, SessionSnapshot
from .settings import AppSettings
from .dispatch import LookupResult, DispatchResult, DispatchErrorKind, RecipientIdentity

__all__ = [
    "AppSettings",
    "ConnectionEvent",
    "DispatchErrorKind",
    "DispatchResult",
    "LaunchConfig",
    "LookupResult",
    "RecipientIdentity",
    "RuntimeDeps",
    "SessionPhase",
    "SessionSnapshot",
    "SessionState",
]
