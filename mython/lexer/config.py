"""
Configuration for the Mython lexer.

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping


INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


class OverflowPolicy(Enum):
    """What to do with an integer literal outside the configured range"""
    ERROR = auto()      # Raise NumberOverflowError
    SATURATE = auto()   # Clamp into [int_min, int_max]
    WRAP = auto()       # Wrap modulo the size of [int_min, int_max]


class EscapePolicy(Enum):
    """What to do with an unrecognized escape sequence in a string literal"""
    LITERAL = auto()    # Keep the escaped character: \q -> q
    DROP = auto()       # Discard backslash and character (legacy behavior)


@dataclass(frozen=True)
class LexerConfig:
    """Configuration parameters for the lexer"""

    # Indentation
    indent_width: int = 2

    # Integer literals
    int_min: int = INT32_MIN
    int_max: int = INT32_MAX
    overflow: OverflowPolicy = OverflowPolicy.ERROR

    # String literals
    unknown_escape: EscapePolicy = EscapePolicy.LITERAL

    def __post_init__(self):
        for name in ("indent_width", "int_min", "int_max"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.indent_width < 1:
            raise ValueError(f"indent_width must be at least 1, got {self.indent_width}")
        if self.int_min > self.int_max:
            raise ValueError(f"int_min ({self.int_min}) is greater than int_max ({self.int_max})")
        if not isinstance(self.overflow, OverflowPolicy):
            raise ValueError(f"overflow must be an OverflowPolicy, got {self.overflow!r}")
        if not isinstance(self.unknown_escape, EscapePolicy):
            raise ValueError(f"unknown_escape must be an EscapePolicy, got {self.unknown_escape!r}")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "LexerConfig":
        """
        Build a configuration from plain values.

        Policies may be given as enum members or as their names
        (case-insensitive), e.g. {"overflow": "saturate"}.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ValueError(f"Unknown lexer option(s): {', '.join(sorted(unknown))}")

        kwargs: Dict[str, Any] = dict(options)
        if "overflow" in kwargs:
            kwargs["overflow"] = _parse_policy(OverflowPolicy, kwargs["overflow"])
        if "unknown_escape" in kwargs:
            kwargs["unknown_escape"] = _parse_policy(EscapePolicy, kwargs["unknown_escape"])
        return cls(**kwargs)

    def clamp_int(self, value: int) -> int:
        """
        Bring an out-of-range value into [int_min, int_max].

        WRAP wraps modulo the size of the range, which is two's complement
        wrapping for the default 32-bit bounds. SATURATE clamps.
        """
        if self.overflow is OverflowPolicy.WRAP:
            span = self.int_max - self.int_min + 1
            return (value - self.int_min) % span + self.int_min
        return max(self.int_min, min(self.int_max, value))


def _parse_policy(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    choices = ", ".join(member.name.lower() for member in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} {value!r}, expected one of: {choices}")


DEFAULT_CONFIG = LexerConfig()
