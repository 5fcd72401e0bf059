"""Path tracer running ``traceroute`` or ``tracepath``.

``traceroute`` is preferred because it is faster. Hop addresses are read
from the second column of each output line; lines without an address
there (headers, ``no reply``, ``*``) are skipped, as are repeats of the
previous hop. The destination's own address is appended when the tool
did not report it as the last hop.
"""

from __future__ import annotations

import ipaddress
import logging
import os
import socket
import subprocess
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ...config import TraceConfig, get_config
from ...domain.errors import TraceError


def is_valid_address(text: str) -> bool:
    """Return whether ``text`` is a literal IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def is_unroutable_address(text: str) -> bool:
    """Return whether ``text`` is an address that cannot be geo-located.

    Private, loopback, link-local and reserved addresses count as
    unroutable; anything that is not an address is not.
    """
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        return False
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
    )


def resolve_address(host: str) -> Optional[str]:
    """Resolve ``host`` to an IP address string, or None if that fails."""
    if is_valid_address(host):
        return host
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError):
        return None
    # IPv4 results first, matching the tools' default behaviour
    infos.sort(key=lambda info: info[0] != socket.AF_INET)
    return str(infos[0][4][0]) if infos else None


@dataclass
class HopParser:
    """Collects hop addresses from tracing tool output, line by line."""

    on_hop: Optional[Callable[[str], None]] = None
    hops: List[str] = field(default_factory=list)

    def feed(self, line: str) -> Optional[str]:
        """Parse one output line; return the new hop address, if any."""
        parts = line.split()
        if len(parts) < 2:
            return None
        candidate = parts[1].strip()
        if not is_valid_address(candidate):
            return None
        if self.hops and self.hops[-1] == candidate:
            return None
        self.hops.append(candidate)
        if self.on_hop is not None:
            self.on_hop(candidate)
        return candidate

    def result(self, destination: Optional[str]) -> List[str]:
        hops = list(self.hops)
        if destination is not None and (not hops or hops[-1] != destination):
            hops.append(destination)
        return hops


@dataclass
class TracePathTracer:
    """PathTracerPort implementation using the system's tracing tools.

    Attributes:
        config: Tracing configuration
    """

    config: TraceConfig = field(default_factory=lambda: get_config().trace)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def _is_executable(path: Path) -> bool:
        return path.is_file() and os.access(path, os.X_OK)

    def is_available(self) -> bool:
        return self._is_executable(self.config.traceroute_path) or self._is_executable(
            self.config.tracepath_path
        )

    def command_line(self, address: str) -> List[str]:
        """Return the command tracing ``address`` with the preferred tool.

        Raises:
            TraceError: If neither tool is installed.
        """
        if self._is_executable(self.config.traceroute_path):
            return [str(self.config.traceroute_path), "-n", "-q", "1", "-w", "1", address]
        if self._is_executable(self.config.tracepath_path):
            return [str(self.config.tracepath_path), "-n", address]
        raise TraceError("No path tracing tool available", address=address)

    def _run(self, command: Sequence[str], parser: HopParser, address: str) -> None:
        tail: deque = deque(maxlen=5)
        try:
            process = subprocess.Popen(
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise TraceError(
                f"Failed to start {command[0]}", address=address, tool=command[0], cause=e
            )

        with process:
            assert process.stdout is not None
            for line in process.stdout:
                if parser.feed(line) is None and line.strip():
                    tail.append(line.strip())
            exit_code = process.wait()

        if exit_code != 0:
            raise TraceError(
                f"Tracing path failed with exit code {exit_code}: {' | '.join(tail)}",
                address=address,
                tool=command[0],
            )

    def trace(
        self,
        address: str,
        on_hop: Optional[Callable[[str], None]] = None,
    ) -> List[str]:
        """Trace the hops to ``address``.

        Args:
            address: Hostname or IP address to trace.
            on_hop: Called with each hop address as soon as it is parsed.

        Returns:
            Hop addresses in order, ending with the destination when it
            could be resolved. Unroutable hops are dropped when
            ``config.drop_unroutable`` is set.

        Raises:
            TraceError: If no tool is available or the tool failed.
        """
        command = self.command_line(address)
        self._logger.info(
            "Tracing path", extra={"address": address, "tool": command[0]}
        )

        parser = HopParser(on_hop=on_hop)
        self._run(command, parser, address)
        hops = parser.result(resolve_address(address))

        if self.config.drop_unroutable:
            hops = [hop for hop in hops if not is_unroutable_address(hop)]

        self._logger.info("Path traced", extra={"address": address, "hops": len(hops)})
        return hops
