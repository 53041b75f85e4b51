from typing import Protocol


class Port(Protocol):
    """Marker base for interfaces the domain depends on and infrastructure implements."""
