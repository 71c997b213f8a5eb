"""EC2 key pair component and key reference resolution."""

from .scope import Node, Scope
from .types import GeneratedKey, KeyReference, NamedKey
from .utils import log
from .values import Output, PropertyValue


class KeyPair:
    """Create, import or reference an EC2 key pair.

    :param name: Logical name for the key pair node
    :param scope: Scope to register the node in
    :param public_key: Public key material to import (optional)
    :param existing_id: Id of an existing key pair to reference (optional)
    """

    def __init__(
        self,
        name: str,
        *,
        scope: Scope,
        public_key: PropertyValue = None,
        existing_id: str | None = None,
    ):
        props = {"publicKey": public_key} if public_key is not None else None
        self.node = scope.register(
            name, "aws:ec2:KeyPair", props, existing_id=existing_id
        )

    @property
    def id(self) -> Output:
        return self.node.id

    @property
    def key_name(self) -> Output:
        return self.node.field("keyName")


def resolve_key_name(
    ref: KeyReference | None, name: str, scope: Scope
) -> tuple[PropertyValue, KeyPair | None, Node | None]:
    """Turn a key reference into a ``keyName`` value.

    A named key is passed through. A generated key registers an ED25519
    private key node ``<name>-key-material`` and a key pair ``<name>-key``
    importing its public half.

    :return: (key_name_value, key_pair, key_material_node)
    """
    if ref is None:
        return None, None, None
    if isinstance(ref, NamedKey):
        return ref.name, None, None
    if isinstance(ref, GeneratedKey):
        log(f"Generating key pair '{name}-key'")
        material = scope.register(
            f"{name}-key-material", "tls:index:PrivateKey", {"algorithm": "ED25519"}
        )
        key_pair = KeyPair(
            f"{name}-key",
            scope=scope,
            public_key=material.field("publicKeyOpenssh"),
        )
        return key_pair.key_name, key_pair, material
    raise TypeError(f"Unknown key reference: {ref!r}")
