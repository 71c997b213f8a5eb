"""Registration scopes: where planned nodes and lookups are recorded.

The provisioning engine owns nodes once registered. ``Scope`` is the
interface the planner talks to; ``MemoryScope`` keeps everything in memory
and renders the Pulumi YAML program the engine consumes.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

from .errors import DuplicateNodeError
from .types import InvokeDocument, NodeDocument
from .values import Output, PropertyValue, Properties, encode_value

logger = logging.getLogger("vmplan")


@dataclass(frozen=True, eq=False)
class Node:
    """Registered resource. Identity is the object itself."""

    logical_name: str
    type_token: str
    properties: Mapping[str, PropertyValue] = field(default_factory=Properties)
    depends_on: tuple["Node", ...] = ()
    existing_id: str | None = None

    @property
    def output(self) -> Output:
        return Output(self.logical_name)

    @property
    def id(self) -> Output:
        return self.field("id")

    def field(self, *path: str) -> Output:
        return self.output.field(*path)

    def __repr__(self) -> str:
        return f"Node({self.logical_name!r}, {self.type_token!r})"


class Scope(Protocol):
    def register(
        self,
        logical_name: str,
        type_token: str,
        properties: Mapping[str, PropertyValue] | None = None,
        depends_on: Sequence[Node] = (),
        existing_id: str | None = None,
    ) -> Node: ...

    def invoke(
        self, name: str, function: str, arguments: Mapping[str, PropertyValue]
    ) -> Output: ...


@dataclass(frozen=True)
class Invocation:
    name: str
    function: str
    arguments: Mapping[str, PropertyValue]


class MemoryScope:
    """In-memory scope for one planning pass.

    Not thread safe: plan independent components in separate scopes.
    """

    def __init__(self, project: str = "vmplan"):
        self.project = project
        self.nodes: list[Node] = []
        self.invocations: list[Invocation] = []
        self._names: set[str] = set()

    def _claim(self, name: str) -> None:
        if name in self._names:
            raise DuplicateNodeError(name)
        self._names.add(name)

    def register(
        self,
        logical_name: str,
        type_token: str,
        properties: Mapping[str, PropertyValue] | None = None,
        depends_on: Sequence[Node] = (),
        existing_id: str | None = None,
    ) -> Node:
        self._claim(logical_name)
        node = Node(
            logical_name,
            type_token,
            Properties(properties or {}),
            tuple(depends_on),
            existing_id,
        )
        self.nodes.append(node)
        logger.debug(f"Registered '{logical_name}' ({type_token})")
        return node

    def invoke(
        self, name: str, function: str, arguments: Mapping[str, PropertyValue]
    ) -> Output:
        """Record a lookup; repeating an identical lookup returns the same handle."""
        invocation = Invocation(name, function, dict(arguments))
        for existing in self.invocations:
            if existing == invocation:
                return Output(name)
        self._claim(name)
        self.invocations.append(invocation)
        logger.debug(f"Invoked '{function}' as '{name}'")
        return Output(name)

    def get(self, logical_name: str) -> Node:
        for node in self.nodes:
            if node.logical_name == logical_name:
                return node
        raise KeyError(logical_name)

    def of_type(self, type_token: str) -> list[Node]:
        return [n for n in self.nodes if n.type_token == type_token]

    def document(self, outputs: Mapping[str, PropertyValue] | None = None) -> dict:
        """Render the Pulumi YAML program for everything registered so far."""
        resources: dict[str, NodeDocument] = {}
        for node in self.nodes:
            entry: NodeDocument = {"type": node.type_token}
            props = Properties(node.properties).encode()
            if props:
                entry["properties"] = props
            if node.depends_on:
                entry["options"] = {
                    "dependsOn": [str(d.output) for d in node.depends_on]
                }
            if node.existing_id is not None:
                entry["get"] = {"id": node.existing_id}
            resources[node.logical_name] = entry

        variables: dict[str, dict[str, InvokeDocument]] = {}
        for inv in self.invocations:
            variables[inv.name] = {
                "fn::invoke": {
                    "function": inv.function,
                    "arguments": encode_value(dict(inv.arguments)),
                }
            }

        doc = {"name": self.project, "runtime": "yaml", "resources": resources}
        if variables:
            doc["variables"] = variables
        if outputs:
            doc["outputs"] = encode_value(dict(outputs))
        return doc
