"""Property values and unresolved output handles.

Nodes carry their properties as an ordered mapping of string keys to
``PropertyValue``. Values that are only known after the provisioning engine
applies the program are ``Output`` handles: a reference to a field of a
registered node or lookup, rendered as ``${source.path}`` in the program
document. ``interpolate()`` combines literals and handles into one string.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Output:
    """Unresolved value: ``path`` inside the result of ``source``.

    ``source`` is the logical name of a node or lookup variable. An empty
    ``path`` refers to the whole result.
    """

    source: str
    path: tuple[str, ...] = ()

    def field(self, *path: str) -> "Output":
        """Project a nested field, e.g. ``subnet.field("availabilityZone")``."""
        parts = []
        for p in path:
            parts.extend(p.split("."))
        return Output(self.source, self.path + tuple(parts))

    def __str__(self) -> str:
        return "${" + ".".join((self.source,) + self.path) + "}"


@dataclass(frozen=True)
class Interpolation:
    """String built from literals and output handles, resolved by the engine."""

    parts: tuple[Union[str, Output], ...]

    @property
    def sources(self) -> set[str]:
        return {p.source for p in self.parts if isinstance(p, Output)}

    def __str__(self) -> str:
        return "".join(str(p) for p in self.parts)


def interpolate(*parts: Union[str, Output]) -> Interpolation | str:
    """Join literal strings and handles.

    Collapses to a plain ``str`` when no handle is involved.
    """
    if not any(isinstance(p, Output) for p in parts):
        return "".join(parts)
    merged: list[Union[str, Output]] = []
    for p in parts:
        if isinstance(p, str) and merged and isinstance(merged[-1], str):
            merged[-1] += p
        elif p != "":
            merged.append(p)
    return Interpolation(tuple(merged))


PropertyValue = Union[
    str, bool, int, float, list, dict, Output, Interpolation, None
]


def encode_value(value: PropertyValue):
    """Render a property value for the program document.

    ``None`` entries inside mappings are omitted; handles become
    ``${source.path}`` strings.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (Output, Interpolation)):
        return str(value)
    if isinstance(value, dict):
        return {
            str(k): encode_value(v) for k, v in value.items() if v is not None
        }
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    raise TypeError(f"Unsupported property value: {value!r}")


class Properties(dict):
    """Ordered property mapping; absent (``None``) entries are kept until
    serialization, where ``encode()`` drops them."""

    def encode(self) -> dict:
        return encode_value(dict(self))
