"""Tracing port - Abstraction for discovering the hops to a host."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol


class PathTracerPort(Protocol):
    """Port for network path tracing.

    Implementation: adapters/tracing/tracepath_adapter.py
    """

    def is_available(self) -> bool:
        """Return whether a tracing tool is installed."""
        ...

    def trace(
        self,
        address: str,
        on_hop: Optional[Callable[[str], None]] = None,
    ) -> List[str]:
        """Trace the hops from this machine to ``address``.

        Args:
            address: Hostname or IP address to trace.
            on_hop: Called with each hop address as it is discovered.

        Returns:
            Hop IP addresses in order, ending with the destination.

        Raises:
            TraceError: If no tool is available or tracing failed.
        """
        ...
