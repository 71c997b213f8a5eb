"""Output handles derived from a planned topology."""

from dataclasses import dataclass

from .lookups import get_arn
from .planner import Topology, address_mode
from .scope import Scope
from .types import InstanceConfig
from .values import Output


@dataclass(frozen=True)
class OutputSet:
    instance_id: Output
    arn: Output
    public_ip: Output
    private_ip: Output
    dns_name: Output

    def named(self) -> dict[str, Output]:
        return {
            "instanceId": self.instance_id,
            "arn": self.arn,
            "publicIp": self.public_ip,
            "privateIp": self.private_ip,
            "dnsName": self.dns_name,
        }

    def aliases(self) -> dict[str, Output]:
        """Pluralized names, for collecting outputs across several instances."""
        return {
            "instanceId": self.instance_id,
            "arns": self.arn,
            "publicIps": self.public_ip,
            "privateIps": self.private_ip,
            "dnsNames": self.dns_name,
        }


def project(topology: Topology, cfg: InstanceConfig, scope: Scope) -> OutputSet:
    """Derive the instance outputs.

    ``public_ip`` reads the elastic IP when one is associated, otherwise the
    address the provider assigns to the instance.
    """
    instance = topology.instance
    if address_mode(cfg) == "elastic":
        public_ip = topology.elastic_address.field("publicIp")
    else:
        public_ip = instance.field("publicIp")
    return OutputSet(
        instance_id=instance.id,
        arn=get_arn(instance, scope).field("arn"),
        public_ip=public_ip,
        private_ip=instance.field("privateIp"),
        dns_name=instance.field("publicDns"),
    )
