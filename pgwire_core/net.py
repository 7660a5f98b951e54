"""Opening TCP and Unix-domain sockets to the server."""

from __future__ import annotations

import asyncio
import socket
from collections.abc import Awaitable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TypeVar, Union

from .errors import PostgresError

__all__ = [
    "KeepaliveConfig",
    "TcpHost",
    "UnixHost",
    "unix_socket_path",
    "connect_socket",
]

_T = TypeVar("_T")
_C_INT_MAX = 2**31 - 1


def _seconds(value: float) -> int:
    return min(int(value), _C_INT_MAX)


@dataclass(frozen=True)
class KeepaliveConfig:
    """TCP keepalive settings; times are in seconds."""

    idle: float
    interval: Optional[float] = None
    retries: Optional[int] = None

    def apply(self, sock: socket.socket) -> None:
        """Enable keepalive on ``sock`` with these settings."""
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        idle = _seconds(self.idle)
        if hasattr(socket, "TCP_KEEPIDLE"):
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, idle)
        elif hasattr(socket, "TCP_KEEPALIVE"):
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPALIVE, idle)
        elif hasattr(socket, "SIO_KEEPALIVE_VALS") and hasattr(sock, "ioctl"):
            interval = self.interval if self.interval is not None else self.idle
            sock.ioctl(
                socket.SIO_KEEPALIVE_VALS,
                (1, int(self.idle * 1000), int(interval * 1000)),
            )
            return
        if self.interval is not None and hasattr(socket, "TCP_KEEPINTVL"):
            sock.setsockopt(
                socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, _seconds(self.interval)
            )
        if self.retries is not None and hasattr(socket, "TCP_KEEPCNT"):
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_KEEPCNT, self.retries)


@dataclass(frozen=True)
class TcpHost:
    """A host reached over TCP, by name or address."""

    name: str


@dataclass(frozen=True)
class UnixHost:
    """A directory holding the server's Unix-domain socket."""

    path: Union[str, Path]


Host = Union[TcpHost, UnixHost]


def unix_socket_path(directory: Union[str, Path], port: int) -> Path:
    """The path of the server socket for ``port`` inside ``directory``."""
    return Path(directory) / f".s.PGSQL.{port}"


async def _connect_with_timeout(
    connect: Awaitable[_T], timeout: Optional[float]
) -> _T:
    try:
        if timeout is None:
            return await connect
        return await asyncio.wait_for(connect, timeout)
    except asyncio.TimeoutError as exc:
        raise PostgresError.connect(TimeoutError("connection timed out")) from exc
    except OSError as exc:
        raise PostgresError.connect(exc) from exc


async def _open_tcp(
    family: int, address: tuple, timeout: Optional[float]
) -> socket.socket:
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setblocking(False)
    loop = asyncio.get_running_loop()
    try:
        await _connect_with_timeout(loop.sock_connect(sock, address), timeout)
    except BaseException:
        sock.close()
        raise
    return sock


async def connect_socket(
    host: Host,
    port: int,
    connect_timeout: Optional[float] = None,
    keepalive: Optional[KeepaliveConfig] = None,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Connect to ``host`` and return a stream reader and writer.

    Every resolved address of a TCP host is tried in turn; the last failure
    is raised when none accepts the connection.
    """
    if isinstance(host, UnixHost):
        if not hasattr(asyncio, "open_unix_connection"):
            raise PostgresError.connect(
                OSError("Unix-domain sockets are not supported on this platform")
            )
        path = unix_socket_path(host.path, port)
        return await _connect_with_timeout(
            asyncio.open_unix_connection(str(path)), connect_timeout
        )

    loop = asyncio.get_running_loop()
    try:
        addresses = await loop.getaddrinfo(host.name, port, type=socket.SOCK_STREAM)
    except OSError as exc:
        raise PostgresError.connect(exc) from exc

    last_error: Optional[PostgresError] = None
    for family, _type, _proto, _canon, address in addresses:
        try:
            sock = await _open_tcp(family, address, connect_timeout)
        except PostgresError as exc:
            last_error = exc
            continue
        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            if keepalive is not None:
                keepalive.apply(sock)
        except OSError as exc:
            sock.close()
            raise PostgresError.connect(exc) from exc
        return await asyncio.open_connection(sock=sock)

    if last_error is not None:
        raise last_error
    raise PostgresError.connect(ValueError("could not resolve any addresses"))