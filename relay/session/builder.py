"""Protocol for whatever builds unstarted connections for the lifecycle manager."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from relay.state.launch import LaunchConfig

from .protocols import Connection


@runtime_checkable
class ConnectionBuilder(Protocol):
    """Builds an unstarted connection bound to the credential store."""

    @property
    def store_dir(self) -> Path: ...
    def locate_runtime(self) -> str: ...
    def build_launch_config(self, executable_path: str) -> LaunchConfig: ...
    def create_connection(self, launch: LaunchConfig, store_dir: Path) -> Connection: ...


__all__ = ["ConnectionBuilder"]
