"""
Data models for cluster creation requests.
"""
from dataclasses import dataclass, field
from typing import Sequence

from tksctl.errors import UsageError
from tksctl.modules import lcm_pb

DEFAULT_TEMPLATE = "aws-reference"
DEFAULT_NUM_OF_AZ = 3
DEFAULT_MACHINE_REPLICAS = 3

USAGE = "Usage: tks cluster create <CLUSTERNAME>"

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class ClusterRawConfig:
    """Infrastructure parameters for the new cluster."""
    ssh_key_name: str = ""
    region: str = ""
    machine_type: str = ""
    num_of_az: int = DEFAULT_NUM_OF_AZ
    machine_replicas: int = DEFAULT_MACHINE_REPLICAS


@dataclass(frozen=True)
class ClusterCreationRequest:
    """A request to create one cluster through the LCM service."""
    name: str
    contract_id: str = ""
    csp_id: str = ""
    template_name: str = DEFAULT_TEMPLATE
    conf: ClusterRawConfig = field(default_factory=ClusterRawConfig)

    def to_message(self):
        """Convert to the CreateClusterRequest wire message."""
        for flag, value in (("num-of-az", self.conf.num_of_az),
                            ("machine-replicas", self.conf.machine_replicas)):
            if not INT32_MIN <= value <= INT32_MAX:
                raise UsageError(f"--{flag} is out of range: {value}")

        return lcm_pb.CreateClusterRequest(
            name=self.name,
            contract_id=self.contract_id,
            csp_id=self.csp_id,
            template_name=self.template_name,
            conf=lcm_pb.ClusterRawConf(
                ssh_key_name=self.conf.ssh_key_name,
                region=self.conf.region,
                machine_type=self.conf.machine_type,
                num_of_az=self.conf.num_of_az,
                machine_replicas=self.conf.machine_replicas,
            ),
        )


def build_create_request(
    args: Sequence[str],
    contract_id: str = "",
    csp_id: str = "",
    region: str = "",
    num_of_az: int = DEFAULT_NUM_OF_AZ,
    ssh_key_name: str = "",
    machine_type: str = "",
    machine_replicas: int = DEFAULT_MACHINE_REPLICAS,
    template: str = DEFAULT_TEMPLATE,
) -> ClusterCreationRequest:
    """
    Build a cluster creation request from positional arguments and flags.

    Args:
        args: Positional arguments; the first one is the cluster name
        contract_id: Contract ID
        csp_id: CSP ID
        region: AWS region
        num_of_az: Number of availability zones in the region
        ssh_key_name: SSH key name for EC2 instance connection
        machine_type: Machine type of worker nodes
        machine_replicas: Replica count of worker nodes
        template: Template name for the cluster

    Returns:
        The request, ready to be sent

    Raises:
        UsageError: If no cluster name was given
    """
    if not args or not args[0]:
        raise UsageError(USAGE)

    return ClusterCreationRequest(
        name=args[0],
        contract_id=contract_id,
        csp_id=csp_id,
        template_name=template,
        conf=ClusterRawConfig(
            ssh_key_name=ssh_key_name,
            region=region,
            machine_type=machine_type,
            num_of_az=num_of_az,
            machine_replicas=machine_replicas,
        ),
    )
