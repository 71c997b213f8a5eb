"""Provider lookup functions, invoked by the engine at apply time."""

import re

from .scope import Node, Scope
from .values import Output

# Debian images, as published by the Debian cloud team
DEBIAN_OWNER = "136693071363"


def get_subnet(subnet_id: str, scope: Scope) -> Output:
    """Look up a subnet by id; fields include ``availabilityZone``."""
    return scope.invoke(
        f"get-subnet-{subnet_id}", "aws:ec2:getSubnet", {"id": subnet_id}
    )


def get_arn(node: Node, scope: Scope) -> Output:
    """Parse the ARN of a registered node; the result carries ``arn``."""
    return scope.invoke(
        f"{node.logical_name}-arn", "aws:getArn", {"arn": node.field("arn")}
    )


def get_ami(
    scope: Scope,
    name: str | None = None,
    owners: list[str] | None = None,
    filters: dict[str, list[str]] | None = None,
    most_recent: bool = True,
) -> Output:
    """Look up an AMI by name pattern, owners or filters.

    Use ``get_ami(scope, name="debian-12-amd64-*").field("id")`` as an
    instance ``ami``.
    """
    arguments: dict = {"mostRecent": most_recent}
    if owners is not None:
        arguments["owners"] = owners
    all_filters = {"name": [name]} if name is not None else {}
    all_filters.update(filters or {})
    if all_filters:
        arguments["filters"] = [
            {"name": k, "values": v} for k, v in all_filters.items()
        ]

    var_name = "get-ami"
    if name is not None:
        var_name += "-" + re.sub(r"[^A-Za-z0-9-]+", "-", name).strip("-")
    return scope.invoke(var_name, "aws:ec2:getAmi", arguments)
