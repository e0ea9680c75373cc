from typing import Any, Dict, List, Sequence, Tuple

import pytest

from devoting_deployment.constants import DEVOTING, DEVOTING_NFT
from devoting_deployment.orchestrator import Provisioner, ProvisioningResult
from devoting_deployment.store import AddressStore

DEPLOYER = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"
NFT_ADDRESS = "0x111"
VOTING_ADDRESS = "0x222"


class FakeProvisioner(Provisioner):
    """Returns canned results per contract and records every call."""

    def __init__(self, results: Dict[str, ProvisioningResult]):
        self.results = results
        self.calls: List[Tuple[str, List[Any]]] = list()

    def provision(self, artifact_kind: str, constructor_args: Sequence[Any]) -> ProvisioningResult:
        self.calls.append((artifact_kind, list(constructor_args)))
        return self.results[artifact_kind]

    @property
    def called_contracts(self) -> List[str]:
        return [artifact_kind for artifact_kind, _ in self.calls]


# Fixtures
@pytest.fixture
def address_file(tmp_path):
    return tmp_path / ".env"


@pytest.fixture
def store(address_file):
    return AddressStore(address_file)


@pytest.fixture
def provisioner():
    return FakeProvisioner(
        {
            DEVOTING_NFT: ProvisioningResult(address=NFT_ADDRESS, success=True, deployer=DEPLOYER),
            DEVOTING: ProvisioningResult(address=VOTING_ADDRESS, success=True, deployer=DEPLOYER),
        }
    )
