"""Default subnet component."""

from .scope import Scope
from .values import Output, Properties


class DefaultSubnet:
    """Adopt the default subnet of an availability zone.

    The provider manages default subnets per zone; the node only brings one
    under the program's control, it never creates a new subnet.

    :param scope: Scope to register the node in
    :param availability_zone: Zone of the default subnet, e.g. ``us-east-1a``
    :param name: Logical name for the node
    :param map_public_ip_on_launch: Give launched instances a public IP
    :param tags: Tags for the subnet
    """

    def __init__(
        self,
        *,
        scope: Scope,
        availability_zone: str | None = None,
        name: str = "default-subnet",
        map_public_ip_on_launch: bool | None = None,
        tags: dict[str, str] | None = None,
    ):
        self.node = scope.register(
            name,
            "aws:ec2:DefaultSubnet",
            Properties(
                availabilityZone=availability_zone,
                mapPublicIpOnLaunch=map_public_ip_on_launch,
                tags=tags,
            ),
        )

    @property
    def id(self) -> Output:
        return self.node.id

    @property
    def availability_zone(self) -> Output:
        return self.node.field("availabilityZone")
