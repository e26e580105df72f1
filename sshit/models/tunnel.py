"""Port-forward tunnel records and their owning store."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

TunnelStatus = Literal["starting", "active", "failed", "closed"]


@dataclass
class Tunnel:
    """A local port forwarded to a port on a remote host."""

    local_port: int
    remote_port: int
    remote_host: str
    ssh_host: str
    ssh_user: str
    status: TunnelStatus = "starting"
    opened_at: datetime | None = None
    closed_at: datetime | None = None
    pid: int | None = None
    error: str | None = None

    def describe(self) -> str:
        return f"{self.local_port} -> {self.remote_host}:{self.remote_port}"


@dataclass
class TunnelStore:
    """Tunnel list owned by whoever creates it.

    Pass the store to the code that needs it; there is no shared instance.
    """

    tunnels: list[Tunnel] = field(default_factory=list)

    def add(self, tunnel: Tunnel) -> None:
        self.tunnels.append(tunnel)

    def summary(self) -> str:
        count = len(self.tunnels)
        if count == 0:
            return "No tunnels"
        return f"{count} tunnel{'' if count == 1 else 's'}"
