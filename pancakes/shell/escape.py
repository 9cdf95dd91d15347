from __future__ import annotations

import os
import re

_SAFE_RE = re.compile(r"[a-zA-Z0-9.:/_-]+")

# Replaced with a space on POSIX; never passed through to the shell.
_POSIX_CONTROL_CHARS = ("\t", "\n", "\r", "\0", "\x0b")


def is_windows() -> bool:
    return os.name == "nt"


def escape_shell_arg(value: str, raw: bool = False, *, windows: bool | None = None) -> str:
    """Quote ``value`` for the command shell of the given OS family.

    ``windows`` defaults to the OS family of the running interpreter. With
    ``raw=True`` the value is escaped but not wrapped in quotes, for callers
    that splice it into an already-quoted string.
    """
    if _SAFE_RE.fullmatch(value):
        return value
    if is_windows() if windows is None else windows:
        return _escape_windows(value, raw)
    return _escape_posix(value, raw)


def _escape_posix(value: str, raw: bool) -> str:
    # 'quote' becomes '\''quote'\''
    value = value.replace("'", "'\\''")
    for ch in _POSIX_CONTROL_CHARS:
        value = value.replace(ch, " ")
    if not raw:
        value = f"'{value}'"
    return value


def _escape_windows(value: str, raw: bool) -> str:
    value = value.replace("\\", "\\\\")
    value = value.replace('"', '""')
    value = value.replace("%", "%%")
    if not raw:
        value = f'"{value}"'
    return value


def flag(name: str, *, windows: bool | None = None) -> str:
    prefix = "-" if (is_windows() if windows is None else windows) else "--"
    return prefix + name
