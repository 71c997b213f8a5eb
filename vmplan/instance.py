"""EC2 instance component: the public entry point for planning."""

from .outputs import OutputSet, project
from .planner import Topology, plan_topology
from .scope import Scope
from .types import InstanceConfig
from .values import Output


class Instance:
    """Plan an EC2 instance and its auxiliary nodes into ``scope``.

    Example::

        scope = MemoryScope()
        web = Instance(
            "web-server",
            InstanceConfig(
                ami="ami-0123456789abcdef0",
                subnet_id="subnet-12345",
                security_group_ids=["sg-12345"],
                volumes=[VolumeSpec("/dev/xvdb", 20)],
                public_ip=True,
            ),
            scope=scope,
        )
        scope.document(web.outputs())

    :raises ConfigurationError: If the config is invalid; nothing is registered
    """

    def __init__(self, name: str, args: InstanceConfig | None = None, *, scope: Scope):
        self.name = name
        self.args = args if args is not None else InstanceConfig()
        self.topology: Topology = plan_topology(name, self.args, scope)
        self.output_set: OutputSet = project(self.topology, self.args, scope)

    @property
    def instance_id(self) -> Output:
        return self.output_set.instance_id

    @property
    def arn(self) -> Output:
        return self.output_set.arn

    @property
    def public_ip(self) -> Output:
        return self.output_set.public_ip

    @property
    def private_ip(self) -> Output:
        return self.output_set.private_ip

    @property
    def dns_name(self) -> Output:
        return self.output_set.dns_name

    def outputs(self) -> dict[str, Output]:
        return self.output_set.aliases()


def plan(name: str, args: InstanceConfig | None, scope: Scope) -> Instance:
    return Instance(name, args, scope=scope)
