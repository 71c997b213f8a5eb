"""Type definitions for vmplan."""

from dataclasses import dataclass
from typing import Literal, TypedDict, Union

from .values import Output

DEFAULT_AMI = "ami-0de716d6197524dd9"
DEFAULT_INSTANCE_TYPE = "t3.micro"

NetworkingMode = Literal["direct", "interface"]
AddressMode = Literal["provider", "elastic"]


@dataclass(frozen=True)
class NamedKey:
    """Existing EC2 key pair, referenced by name."""

    name: str


@dataclass(frozen=True)
class GeneratedKey:
    """Request a new key pair provisioned alongside the instance."""


KeyReference = Union[NamedKey, GeneratedKey]


@dataclass(frozen=True)
class VolumeSpec:
    device_name: str
    size_gb: int
    volume_type: str | None = None  # e.g. "gp3"
    delete_on_termination: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "VolumeSpec":
        """:raises ValueError: If deviceName or sizeGB is missing"""
        if not isinstance(data, dict):
            raise ValueError(f"Expected a volume object, got {data!r}")
        missing = [k for k in ("deviceName", "sizeGB") if k not in data]
        if missing:
            raise ValueError(f"Volume {data!r} is missing '{', '.join(missing)}'")
        return cls(
            device_name=data["deviceName"],
            size_gb=int(data["sizeGB"]),
            volume_type=data.get("volumeType"),
            delete_on_termination=data.get("deleteOnTermination", True),
        )


@dataclass(frozen=True)
class InstanceConfig:
    """Arguments used to configure an EC2 instance component."""

    ami: str | Output | None = None
    instance_type: str = DEFAULT_INSTANCE_TYPE
    key: KeyReference | None = None
    subnet_id: str | None = None
    security_group_ids: list[str] | None = None
    user_data: str | None = None
    volumes: list[VolumeSpec] | None = None
    iam_role_arn: str | None = None
    tags: dict[str, str] | None = None
    public_ip: bool = False
    associate_elastic_ip: bool = False

    @property
    def resolved_ami(self) -> str | Output:
        return self.ami if self.ami is not None else DEFAULT_AMI

    @classmethod
    def from_dict(cls, data: dict) -> "InstanceConfig":
        """Build a config from camelCase keys, as found in JSON config files.

        ``key`` is either ``"generated"`` or ``{"name": "<key pair name>"}``.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        key = data.get("key")
        if key == "generated":
            key = GeneratedKey()
        elif isinstance(key, dict) and "name" in key:
            key = NamedKey(key["name"])
        elif key is not None:
            raise ValueError(f"Invalid key reference: {key!r}")

        volumes = data.get("volumes")
        if volumes is not None:
            volumes = [VolumeSpec.from_dict(v) for v in volumes]

        return cls(
            ami=data.get("ami"),
            instance_type=data.get("instanceType", DEFAULT_INSTANCE_TYPE),
            key=key,
            subnet_id=data.get("subnetId"),
            security_group_ids=data.get("securityGroupIds"),
            user_data=data.get("userData"),
            volumes=volumes,
            iam_role_arn=data.get("iamRoleArn"),
            tags=data.get("tags"),
            public_ip=data.get("publicIP", False),
            associate_elastic_ip=data.get("associateElasticIP", False),
        )


class NodeDocument(TypedDict, total=False):
    """Resource entry in a rendered program document."""

    type: str
    properties: dict
    options: dict
    get: dict


class InvokeDocument(TypedDict):
    """Lookup variable entry in a rendered program document."""

    function: str
    arguments: dict

