"""Instance configuration parsing."""

import pytest

from vmplan.types import DEFAULT_AMI, GeneratedKey, InstanceConfig, NamedKey, VolumeSpec


def test_defaults():
    cfg = InstanceConfig()
    assert cfg.instance_type == "t3.micro"
    assert cfg.resolved_ami == DEFAULT_AMI
    assert cfg.public_ip is False
    assert cfg.associate_elastic_ip is False
    assert VolumeSpec("/dev/xvdb", 20).delete_on_termination is True


def test_from_dict():
    cfg = InstanceConfig.from_dict(
        {
            "ami": "ami-X",
            "instanceType": "t3.small",
            "key": {"name": "deploy"},
            "subnetId": "subnet-1",
            "securityGroupIds": ["sg-1"],
            "volumes": [
                {"deviceName": "/dev/xvdb", "sizeGB": 20},
                {
                    "deviceName": "/dev/xvdc",
                    "sizeGB": "50",
                    "volumeType": "gp3",
                    "deleteOnTermination": False,
                },
            ],
            "tags": {"Name": "web"},
            "publicIP": True,
            "associateElasticIP": True,
        }
    )
    assert cfg.ami == "ami-X"
    assert cfg.resolved_ami == "ami-X"
    assert cfg.instance_type == "t3.small"
    assert cfg.key == NamedKey("deploy")
    assert cfg.volumes == [
        VolumeSpec("/dev/xvdb", 20),
        VolumeSpec("/dev/xvdc", 50, "gp3", delete_on_termination=False),
    ]
    assert cfg.public_ip and cfg.associate_elastic_ip


def test_from_dict_generated_key():
    assert InstanceConfig.from_dict({"key": "generated"}).key == GeneratedKey()
    assert InstanceConfig.from_dict({}) == InstanceConfig()


def test_from_dict_rejects_unknown_key_reference():
    with pytest.raises(ValueError):
        InstanceConfig.from_dict({"key": 42})


@pytest.mark.parametrize(
    "data",
    [
        {"volumes": [{"sizeGB": 20}]},
        {"volumes": [{"deviceName": "/dev/xvdb"}]},
        {"volumes": ["/dev/xvdb:20"]},
        {"key": {"id": "deploy"}},
        ["not", "an", "object"],
    ],
)
def test_from_dict_malformed_input_raises_value_error(data):
    with pytest.raises(ValueError):
        InstanceConfig.from_dict(data)


def test_missing_volume_key_is_named():
    with pytest.raises(ValueError, match="deviceName"):
        VolumeSpec.from_dict({"sizeGB": 20})
