"""vmplan - Plan EC2 instance topologies for a declarative provisioning engine."""

from .errors import (
    AssociateElasticIPRequiresPublicIP,
    ConfigurationError,
    DuplicateNodeError,
    InvalidAccountError,
    ScopeError,
    VmplanError,
    VolumesRequireSubnetId,
)
from .instance import Instance, plan
from .keypair import KeyPair, resolve_key_name
from .subnet import DefaultSubnet
from .lookups import get_ami, get_arn, get_subnet
from .outputs import OutputSet, project
from .planner import Topology, plan_topology, validate
from .scope import MemoryScope, Node, Scope
from .types import (
    DEFAULT_AMI,
    GeneratedKey,
    InstanceConfig,
    KeyReference,
    NamedKey,
    VolumeSpec,
)
from .utils import error, log, warn
from .values import Output, Properties

__all__ = [
    "Instance",
    "plan",
    "plan_topology",
    "validate",
    "project",
    "Topology",
    "OutputSet",
    "KeyPair",
    "resolve_key_name",
    "DefaultSubnet",
    "get_ami",
    "get_arn",
    "get_subnet",
    "MemoryScope",
    "Node",
    "Scope",
    "Output",
    "Properties",
    "DEFAULT_AMI",
    "GeneratedKey",
    "InstanceConfig",
    "KeyReference",
    "NamedKey",
    "VolumeSpec",
    "VmplanError",
    "ConfigurationError",
    "AssociateElasticIPRequiresPublicIP",
    "VolumesRequireSubnetId",
    "ScopeError",
    "DuplicateNodeError",
    "InvalidAccountError",
    "log",
    "warn",
    "error",
]
