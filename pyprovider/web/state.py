from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .broadcast import InMemoryBroadcast


@dataclass
class ServerState:
    broadcast: InMemoryBroadcast = field(default_factory=InMemoryBroadcast)
    latest_html: Optional[str] = None
