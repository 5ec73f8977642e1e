# SPDX-License-Identifier: MIT
"""The HOMEBREW_CCCFG flag string.

The compiler wrapper reads HOMEBREW_CCCFG to decide which flags to strip
or inject. Each character is an independent toggle:

    O - Enable argument refurbishing (make/bsdmake wrappers only).
    x - Enable C++11 mode.
    g - Enable "-stdlib=libc++" for clang.
    h - Enable "-stdlib=libstdc++" for clang.
    K - Don't strip -arch <arch>, -m32, or -m64.
    w - Pass -no_weak_imports to the linker.
    s - Apply the fix for sed's Unicode support.
    a - Apply the fix for the apr-1-config path.

Some of these are mutually exclusive (g and h). Cccfg does not enforce
that; both characters end up in the string and the wrapper decides.
"""

from __future__ import annotations

REFURBISH_ARGS = "O"
CXX11 = "x"
LIBCXX = "g"
LIBSTDCXX = "h"
PERMIT_ARCH_FLAGS = "K"
NO_WEAK_IMPORTS = "w"
SED_UNICODE_FIX = "s"
APR_CONFIG_FIX = "a"

# Present in every composed environment.
DEFAULT_FLAGS = SED_UNICODE_FIX + APR_CONFIG_FIX


class Cccfg:
    """Append-only accumulator of single-character flags.

    Example:
        >>> cfg = Cccfg("sa")
        >>> cfg.append("x")
        >>> cfg.append("x")
        >>> str(cfg)
        'sax'
    """

    __slots__ = ("_flags",)

    def __init__(self, initial: str = "") -> None:
        self._flags = ""
        for flag in initial:
            self.append(flag)

    def append(self, flag: str) -> None:
        """Add a flag unless it is already present.

        Raises:
            ValueError: If flag is not exactly one character.
        """
        if not isinstance(flag, str) or len(flag) != 1:
            raise ValueError(f"cccfg flags are single characters, got {flag!r}")
        if flag not in self._flags:
            self._flags += flag

    def __contains__(self, flag: object) -> bool:
        return isinstance(flag, str) and len(flag) == 1 and flag in self._flags

    def __len__(self) -> int:
        return len(self._flags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Cccfg):
            return self._flags == other._flags
        if isinstance(other, str):
            return self._flags == other
        return NotImplemented

    def __str__(self) -> str:
        return self._flags

    def __repr__(self) -> str:
        return f"Cccfg({self._flags!r})"
