from .events import ConnectionEvents
from .builder import ConnectionBuilder
from .factory import ConnectionFactory
from .protocols import Connection
from .lifecycle import LifecycleManager
from .dispatcher import Dispatcher

__all__ = [
    "Connection",
    "ConnectionBuilder",
    "ConnectionEvents",
    "ConnectionFactory",
    "Dispatcher",
    "LifecycleManager",
]
