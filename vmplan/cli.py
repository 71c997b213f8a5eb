#!/usr/bin/env python3
"""Plan EC2 instance topologies as Pulumi YAML programs.

Usage: uv run vmplan <noun> <verb> [options]

Examples:
    uv run vmplan instance plan web --ami ami-0123 --public-ip
    uv run vmplan instance plan web --config web.json --output web.plan.json
    uv run vmplan instance plan db --subnet-id subnet-1 --volume /dev/xvdb:20:gp3 --save
    uv run vmplan instance show db
    uv run vmplan home bootstrap
"""

import json
from dataclasses import replace
from pathlib import Path

import cyclopts
from botocore.exceptions import BotoCoreError, ClientError
from rich import print, print_json

from .errors import ConfigurationError, InvalidAccountError
from .home import AWSHome
from .instance import Instance
from .lookups import DEBIAN_OWNER, get_ami
from .planner import validate
from .scope import MemoryScope
from .settings import Settings
from .types import GeneratedKey, InstanceConfig, NamedKey, VolumeSpec
from .utils import error, load_json, log, setup_logging

app = cyclopts.App(name="vmplan", help="Plan EC2 instance topologies", sort_key=None)

instance_app = cyclopts.App(name="instance", help="Plan EC2 instances", sort_key=1)
home_app = cyclopts.App(name="home", help="Manage the home bucket", sort_key=2)

app.command(instance_app)
app.command(home_app)


def parse_volume(value: str) -> VolumeSpec:
    """Parse ``DEVICE:SIZE_GB[:TYPE]``, e.g. ``/dev/xvdb:20:gp3``."""
    parts = value.split(":")
    if len(parts) not in (2, 3) or not parts[1].isdigit():
        raise ValueError(f"Invalid volume '{value}', expected DEVICE:SIZE_GB[:TYPE]")
    volume_type = parts[2] if len(parts) == 3 else None
    return VolumeSpec(parts[0], int(parts[1]), volume_type)


def parse_tags(values: list[str]) -> dict[str, str]:
    tags = {}
    for value in values:
        key, sep, val = value.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid tag '{value}', expected KEY=VALUE")
        tags[key] = val
    return tags


def build_config(
    base: InstanceConfig | None = None,
    *,
    ami: str | None = None,
    instance_type: str | None = None,
    key_name: str | None = None,
    generate_key: bool = False,
    subnet_id: str | None = None,
    security_group_ids: list[str] | None = None,
    user_data: str | None = None,
    volumes: list[str] | None = None,
    iam_role_arn: str | None = None,
    tags: list[str] | None = None,
    public_ip: bool = False,
    associate_elastic_ip: bool = False,
) -> InstanceConfig:
    """Overlay command line options on a config loaded from file.

    :raises ValueError: For malformed volume or tag options, or conflicting key options
    """
    cfg = base or InstanceConfig()
    changes = {}
    if key_name is not None and generate_key:
        raise ValueError("Use either --key-name or --generate-key, not both")
    if key_name is not None:
        changes["key"] = NamedKey(key_name)
    elif generate_key:
        changes["key"] = GeneratedKey()
    if volumes:
        changes["volumes"] = [parse_volume(v) for v in volumes]
    if tags:
        changes["tags"] = {**(cfg.tags or {}), **parse_tags(tags)}
    for field_name, value in [
        ("ami", ami),
        ("instance_type", instance_type),
        ("subnet_id", subnet_id),
        ("security_group_ids", security_group_ids),
        ("user_data", user_data),
        ("iam_role_arn", iam_role_arn),
    ]:
        if value is not None:
            changes[field_name] = value
    if public_ip:
        changes["public_ip"] = True
    if associate_elastic_ip:
        changes["associate_elastic_ip"] = True
    return replace(cfg, **changes)


def _home(settings: Settings) -> AWSHome:
    return AWSHome(settings.region, profile=settings.aws_profile)


@instance_app.command(name="plan")
def plan_instance(
    name: str,
    *,
    config: Path | None = None,
    ami: str | None = None,
    ami_name: str | None = None,
    instance_type: str | None = None,
    key_name: str | None = None,
    generate_key: bool = False,
    subnet_id: str | None = None,
    security_group_id: list[str] | None = None,
    user_data_file: Path | None = None,
    volume: list[str] | None = None,
    iam_role_arn: str | None = None,
    tag: list[str] | None = None,
    public_ip: bool = False,
    associate_elastic_ip: bool = False,
    output: Path | None = None,
    save: bool = False,
    stage: str | None = None,
):
    """Plan an EC2 instance and print or save the program.

    :param name: Logical name prefix for the planned nodes
    :param config: JSON file with instance arguments (camelCase keys)
    :param ami: AMI id (default: built-in Debian AMI)
    :param ami_name: Look up the most recent Debian AMI matching this name pattern
    :param instance_type: Instance type (default: t3.micro)
    :param key_name: Existing EC2 key pair name
    :param generate_key: Generate a new key pair with the instance
    :param subnet_id: Subnet to launch in (required for volumes)
    :param security_group_id: Security group ids (creates a network interface)
    :param user_data_file: File with user data script
    :param volume: Extra EBS volume as DEVICE:SIZE_GB[:TYPE]
    :param iam_role_arn: IAM role ARN for the instance profile
    :param tag: Tag as KEY=VALUE
    :param public_ip: Expose a public IP
    :param associate_elastic_ip: Associate an elastic IP (requires --public-ip)
    :param output: Write the program JSON to this file instead of printing it
    :param save: Store the program in the home bucket as NAME.plan.json
    :param stage: Stage name (default: VMPLAN_STAGE or dev)
    """
    settings = Settings.from_env(stage=stage)
    data = load_json(config) if config else None
    user_data = user_data_file.read_text() if user_data_file else None
    try:
        base = InstanceConfig.from_dict(data) if data is not None else None
        cfg = build_config(
            base,
            ami=ami,
            instance_type=instance_type,
            key_name=key_name,
            generate_key=generate_key,
            subnet_id=subnet_id,
            security_group_ids=security_group_id,
            user_data=user_data,
            volumes=volume,
            iam_role_arn=iam_role_arn,
            tags=tag,
            public_ip=public_ip,
            associate_elastic_ip=associate_elastic_ip,
        )
        validate(cfg)
    except (ValueError, ConfigurationError) as e:
        error(f"Invalid configuration for '{name}': {e}")

    scope = MemoryScope(project=settings.project)
    if ami_name:
        ami_id = get_ami(
            scope,
            name=ami_name,
            owners=[DEBIAN_OWNER],
            filters={"architecture": ["x86_64"], "state": ["available"]},
        ).field("id")
        cfg = replace(cfg, ami=ami_id)

    instance = Instance(name, cfg, scope=scope)
    doc = scope.document(instance.output_set.named())

    max_name = max(len(n.logical_name) for n in scope.nodes)
    max_type = max(len(n.type_token) for n in scope.nodes)
    print(f"  {'NODE'.ljust(max_name)}  {'TYPE'.ljust(max_type)}  DEPENDS ON")
    print(f"  {'-' * max_name}  {'-' * max_type}  {'---'}")
    for node in scope.nodes:
        deps = ", ".join(d.logical_name for d in node.depends_on) or "-"
        print(f"  {node.logical_name.ljust(max_name)}  {node.type_token.ljust(max_type)}  {deps}")

    if output:
        output.write_text(json.dumps(doc, indent=2))
        log(f"Wrote program to '{output}'")
    else:
        print_json(data=doc)

    if save:
        try:
            _home(settings).put_item(doc, f"{name}.plan.json", settings)
        except (ClientError, BotoCoreError, InvalidAccountError) as e:
            error(f"Could not save plan for '{name}': {e}")


@instance_app.command(name="show")
def show_instance(name: str, *, stage: str | None = None):
    """Print a plan saved in the home bucket.

    :param name: Instance name used with `instance plan --save`
    :param stage: Stage name (default: VMPLAN_STAGE or dev)
    """
    settings = Settings.from_env(stage=stage)
    try:
        doc = _home(settings).get_item(f"{name}.plan.json", settings)
    except ClientError as e:
        if e.response["Error"]["Code"] in ("NoSuchKey", "NoSuchBucket"):
            error(f"No saved plan for '{name}' in stage '{settings.stage}'")
        error(f"Could not load plan for '{name}': {e}")
    except (BotoCoreError, InvalidAccountError) as e:
        error(f"Could not load plan for '{name}': {e}")
    print_json(data=doc)


@home_app.command(name="bootstrap")
def bootstrap_home(*, region: str | None = None, stage: str | None = None):
    """Create the home bucket if it does not exist.

    :param region: AWS region (default: AWS_REGION or us-east-1)
    :param stage: Stage name (default: VMPLAN_STAGE or dev)
    """
    settings = Settings.from_env(region=region, stage=stage)
    try:
        bucket = _home(settings).bootstrap(settings)
    except (ClientError, BotoCoreError, InvalidAccountError) as e:
        error(f"Could not bootstrap home bucket: {e}")
    print(f"  Bucket: {bucket}")


def main():
    setup_logging()
    app()


if __name__ == "__main__":
    main()
