"""Platform helpers: console symbol conversion, socket options and process limits."""

from __future__ import annotations

import os
import socket
import struct
import sys

try:
    import resource
except ImportError:  # not available on Windows
    resource = None  # type: ignore[assignment]

_IS_WINDOWS = os.name == "nt"
_US_PER_SECOND = 1_000_000


def _check_code(code: int) -> int:
    if not 0 <= code <= 0xFF:
        raise ValueError(f"symbol code out of range: {code}")
    return code


def symbol_to_utf8(code: int) -> bytes:
    """Encode a cp1251 symbol code as UTF-8; Cyrillic letters take two bytes."""
    code = _check_code(code)
    if code >= 0xC0:
        if code >= 0xF0:
            return bytes([0xD1, code - 0x70])
        return bytes([0xD0, code - 0x30])
    if code == 0xA8:
        return b"\xd0\x81"
    if code == 0xB8:
        return b"\xd1\x91"
    return bytes([code])


def symbol_to_console(code: int) -> bytes:
    """Convert a cp1251 symbol code to the single-byte DOS console code page."""
    code = _check_code(code)
    if code >= 0xC0:
        return bytes([code - 0x40 if code <= 0xEF else code - 0x10])
    if code == 0xA8:
        return b"\xf0"
    if code == 0xB8:
        return b"\xf1"
    return bytes([code])


def split_timeout(timeout_ms: int) -> tuple[int, int]:
    """Split a millisecond timeout into ``(seconds, microseconds)``."""
    if timeout_ms < 0:
        raise ValueError("timeout must not be negative")
    return divmod(timeout_ms * 1000, _US_PER_SECOND)


def _timeout_option(timeout_ms: int) -> bytes:
    if _IS_WINDOWS:
        if timeout_ms < 0:
            raise ValueError("timeout must not be negative")
        return struct.pack("@I", timeout_ms)
    seconds, microseconds = split_timeout(timeout_ms)
    return struct.pack("@ll", seconds, microseconds)


def configure_server_socket(sock: socket.socket) -> None:
    """Allow the listening address to be reused."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)


def set_socket_recv_timeout(sock: socket.socket, timeout_ms: int) -> None:
    """Set the kernel receive timeout of ``sock``."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVTIMEO, _timeout_option(timeout_ms))


def set_socket_send_timeout(sock: socket.socket, timeout_ms: int) -> None:
    """Set the kernel send timeout of ``sock``."""
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDTIMEO, _timeout_option(timeout_ms))


def close_server_socket(sock: socket.socket) -> None:
    """Shut down both directions of ``sock`` and close it."""
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass
    sock.close()


def set_min_stack_size(size: int) -> int | None:
    """Raise the soft stack limit to at least ``size`` bytes; return the soft limit.

    Returns ``None`` where the platform has no resource limits.
    """
    if resource is None:
        return None
    soft, hard = resource.getrlimit(resource.RLIMIT_STACK)
    if soft != resource.RLIM_INFINITY and soft < size:
        resource.setrlimit(resource.RLIMIT_STACK, (size, hard))
        soft, _ = resource.getrlimit(resource.RLIMIT_STACK)
    return soft


def set_files_limit(limit: int, quiet: bool = False) -> tuple[int, int] | None:
    """Set the soft limit of open files, keeping the hard one; return the new limits.

    Failures are reported on stderr unless ``quiet``. Returns ``None`` where the
    platform has no resource limits.
    """
    if resource is None:
        return None
    old_soft, old_hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    if not quiet:
        print(f"Old limits -> soft limit= {old_soft} \t hard limit= {old_hard} ")
    try:
        resource.setrlimit(resource.RLIMIT_NOFILE, (limit, old_hard))
    except (ValueError, OSError) as exc:
        if not quiet:
            print(exc, file=sys.stderr)
    new_soft, new_hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    if not quiet:
        print(f"New limits -> soft limit= {new_soft}  hard limit= {new_hard} ")
    return new_soft, new_hard