"""Exceptions raised by vmplan."""


class VmplanError(Exception):
    """Base class for vmplan errors."""


class ConfigurationError(VmplanError):
    """Instance configuration rejected before any node was registered."""

    code = "configurationError"


class AssociateElasticIPRequiresPublicIP(ConfigurationError):
    code = "associateElasticIPRequiresPublicIP"

    def __init__(self):
        super().__init__("associateElasticIP requires publicIP == true")


class VolumesRequireSubnetId(ConfigurationError):
    code = "volumesRequireSubnetId"

    def __init__(self):
        super().__init__(
            "Creating EBS volumes requires subnetId to determine the availability zone"
        )


class ScopeError(VmplanError):
    """Registration scope rejected a node or lookup."""


class DuplicateNodeError(ScopeError):
    def __init__(self, logical_name: str):
        super().__init__(f"Node '{logical_name}' is already registered in this scope")
        self.logical_name = logical_name


class InvalidAccountError(VmplanError):
    """STS did not return an account id."""
