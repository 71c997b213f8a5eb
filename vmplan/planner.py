"""Topology planner for an EC2 instance component.

Turns an ``InstanceConfig`` into registered nodes and dependency edges:

- ``<name>-nic``: network interface, when security groups are given or an
  elastic IP must be associated (``interface`` networking mode)
- ``<name>-instance``: the instance itself
- ``<name>-volume-<j>`` / ``<name>-volume-attach-<j>``: one volume and one
  attachment per configured volume, in input order
- ``<name>-eip`` / ``<name>-eip-assoc``: elastic IP and its association
  (``elastic`` address mode)

All configuration checks run before the first registration, so a rejected
config leaves the scope untouched.
"""

from dataclasses import dataclass, field

from .errors import AssociateElasticIPRequiresPublicIP, VolumesRequireSubnetId
from .keypair import KeyPair, resolve_key_name
from .lookups import get_subnet
from .scope import Node, Scope
from .types import AddressMode, InstanceConfig, NetworkingMode
from .utils import log
from .values import Properties


@dataclass
class Topology:
    instance: Node
    network_interface: Node | None = None
    volumes: list[Node] = field(default_factory=list)
    attachments: list[Node] = field(default_factory=list)
    elastic_address: Node | None = None
    association: Node | None = None
    key_pair: KeyPair | None = None
    key_material: Node | None = None

    def nodes(self) -> list[Node]:
        """Every node in the topology, auxiliary nodes after the instance."""
        nodes = [self.instance]
        for node in [self.key_material, self.network_interface]:
            if node is not None:
                nodes.append(node)
        if self.key_pair is not None:
            nodes.append(self.key_pair.node)
        nodes.extend(self.volumes)
        nodes.extend(self.attachments)
        for node in [self.elastic_address, self.association]:
            if node is not None:
                nodes.append(node)
        return nodes


def validate(cfg: InstanceConfig) -> None:
    """Reject configs that cannot be planned.

    :raises AssociateElasticIPRequiresPublicIP: associate_elastic_ip without public_ip
    :raises VolumesRequireSubnetId: volumes without a subnet to place them in
    """
    if cfg.associate_elastic_ip and not cfg.public_ip:
        raise AssociateElasticIPRequiresPublicIP()
    if cfg.volumes and cfg.subnet_id is None:
        raise VolumesRequireSubnetId()


def networking_mode(cfg: InstanceConfig) -> NetworkingMode:
    if cfg.security_group_ids is not None or cfg.associate_elastic_ip:
        return "interface"
    return "direct"


def address_mode(cfg: InstanceConfig) -> AddressMode:
    if cfg.public_ip and cfg.associate_elastic_ip:
        return "elastic"
    return "provider"


def plan_topology(name: str, cfg: InstanceConfig, scope: Scope) -> Topology:
    """Register the nodes for instance ``name`` in ``scope``.

    :param name: Logical name prefix for every node
    :param cfg: Instance configuration
    :param scope: Scope to register nodes and lookups in
    :return: The planned topology
    :raises ConfigurationError: Before anything is registered
    """
    validate(cfg)
    net_mode = networking_mode(cfg)
    addr_mode = address_mode(cfg)
    log(
        f"Planning instance '{name}' (networking: {net_mode}, address: {addr_mode}, "
        f"volumes: {len(cfg.volumes or [])})"
    )

    # lookups precede every registration
    availability_zone = None
    if cfg.volumes:
        availability_zone = get_subnet(cfg.subnet_id, scope).field("availabilityZone")

    instance_name = f"{name}-instance"
    key_name, key_pair, key_material = resolve_key_name(cfg.key, name, scope)

    nic = None
    if net_mode == "interface":
        nic = scope.register(
            f"{name}-nic",
            "aws:ec2:NetworkInterface",
            Properties(
                subnetId=cfg.subnet_id,
                securityGroups=cfg.security_group_ids,
                description=f"{instance_name}-nic",
            ),
        )

    props = Properties(
        ami=cfg.resolved_ami,
        instanceType=cfg.instance_type,
        keyName=key_name,
        userData=cfg.user_data,
        tags=cfg.tags,
    )
    if net_mode == "interface":
        # subnet and security groups live on the interface
        props["networkInterfaces"] = [
            {"deviceIndex": 0, "networkInterfaceId": nic.id}
        ]
    elif net_mode == "direct":
        props["subnetId"] = cfg.subnet_id
        props["vpcSecurityGroupIds"] = cfg.security_group_ids
    else:
        raise ValueError(f"Unknown networking mode: {net_mode}")
    if cfg.iam_role_arn is not None:
        props["iamInstanceProfile"] = {"arn": cfg.iam_role_arn}

    instance = scope.register(instance_name, "aws:ec2:Instance", props)
    topology = Topology(
        instance=instance,
        network_interface=nic,
        key_pair=key_pair,
        key_material=key_material,
    )

    if cfg.volumes:
        for j, vol in enumerate(cfg.volumes):
            volume = scope.register(
                f"{name}-volume-{j}",
                "aws:ec2:Volume",
                Properties(
                    size=vol.size_gb,
                    type=vol.volume_type,
                    availabilityZone=availability_zone,
                ),
            )
            attachment = scope.register(
                f"{name}-volume-attach-{j}",
                "aws:ec2:VolumeAttachment",
                Properties(
                    deviceName=vol.device_name,
                    volumeId=volume.id,
                    instanceId=instance.id,
                    deleteOnTermination=vol.delete_on_termination,
                ),
                depends_on=[volume, instance],
            )
            topology.volumes.append(volume)
            topology.attachments.append(attachment)

    if addr_mode == "elastic":
        eip = scope.register(f"{name}-eip", "aws:ec2:Eip", Properties(domain="vpc"))
        assoc_props = Properties(allocationId=eip.field("allocationId"))
        if nic is not None:
            assoc_props["networkInterfaceId"] = nic.id
        else:
            assoc_props["instanceId"] = instance.id
        topology.elastic_address = eip
        topology.association = scope.register(
            f"{name}-eip-assoc",
            "aws:ec2:EipAssociation",
            assoc_props,
            depends_on=[eip, instance],
        )
    elif addr_mode != "provider":
        raise ValueError(f"Unknown address mode: {addr_mode}")

    return topology
