from abc import ABC, abstractmethod
from collections import OrderedDict
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

from devoting_deployment.networks import NetworkProfile, resolve_network_profile
from devoting_deployment.steps import DEPLOYMENT_STEPS, DeploymentStep, validate_steps
from devoting_deployment.store import AddressStore, StorageUnavailable


class ProvisioningResult(NamedTuple):
    address: str
    success: bool
    deployer: Optional[str] = None
    error: Optional[str] = None

    @property
    def deployed(self) -> bool:
        return self.success and bool(self.address)


class DeployedArtifact(NamedTuple):
    logical_name: str
    address: str
    deployer: Optional[str] = None


class Provisioner(ABC):
    """Creates a contract and reports where it was deployed."""

    @abstractmethod
    def provision(self, artifact_kind: str, constructor_args: Sequence[Any]) -> ProvisioningResult:
        raise NotImplementedError


class ProvisioningFailed(Exception):
    """Raised when a deployment step did not produce an address."""

    def __init__(self, network_name: str, logical_name: str, reason: Optional[str] = None):
        self.network_name = network_name
        self.logical_name = logical_name
        self.reason = reason
        message = f"{logical_name} deployment UNSUCCESSFUL on network '{network_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StepStatus(Enum):
    DEPLOYED = "deployed"
    FAILED = "failed"
    SKIPPED = "skipped"


class StepOutcome(NamedTuple):
    step: DeploymentStep
    status: StepStatus
    address: Optional[str] = None
    deployer: Optional[str] = None
    error: Optional[Exception] = None


class RunResult:
    """Ordered per-step outcomes of one deployment run."""

    def __init__(self, network_name: str, profile: NetworkProfile, outcomes: List[StepOutcome]):
        self.network_name = network_name
        self.profile = profile
        self.outcomes = outcomes

    @property
    def failure(self) -> Optional[StepOutcome]:
        for outcome in self.outcomes:
            if outcome.status == StepStatus.FAILED:
                return outcome
        return None

    @property
    def succeeded(self) -> bool:
        return all(outcome.status == StepStatus.DEPLOYED for outcome in self.outcomes)

    @property
    def deployments(self) -> Dict[str, str]:
        return OrderedDict(
            (outcome.step.logical_name, outcome.address)
            for outcome in self.outcomes
            if outcome.status == StepStatus.DEPLOYED
        )

    def raise_for_failure(self) -> None:
        failure = self.failure
        if failure is None:
            return
        if isinstance(failure.error, StorageUnavailable):
            raise failure.error
        raise ProvisioningFailed(
            network_name=self.network_name,
            logical_name=failure.step.logical_name,
            reason=str(failure.error) if failure.error else None,
        )


Observer = Callable[[StepOutcome, str], None]


def report_outcome(outcome: StepOutcome, network_name: str) -> None:
    """Prints the result of a single deployment step."""
    contract_name = outcome.step.contract_name
    if outcome.status == StepStatus.DEPLOYED:
        print(
            f"Deployed: {contract_name}",
            f"\tnetwork: {network_name}",
            f"\taddress: {outcome.address}",
            f"\tcreator: {outcome.deployer}",
            sep="\n",
        )
    elif outcome.status == StepStatus.FAILED:
        print(f"(!) {contract_name} Deployment UNSUCCESSFUL on {network_name}")
        if outcome.error:
            print(f"\t{outcome.error}")
    else:
        print(f"(i) Skipped {contract_name}")


class DeploymentOrchestrator:
    """
    Deploys the contracts of a fixed step sequence in order, feeding the
    addresses of earlier deployments into later constructors, and records
    each address in the address store as soon as it is known.

    A step that fails ends the run; later steps are reported as skipped.
    """

    def __init__(
        self,
        provisioner: Provisioner,
        store: AddressStore,
        steps: Sequence[DeploymentStep] = DEPLOYMENT_STEPS,
        resolver: Callable[[str], NetworkProfile] = resolve_network_profile,
        observers: Optional[List[Observer]] = None,
    ):
        validate_steps(steps)
        self.provisioner = provisioner
        self.store = store
        self.steps = tuple(steps)
        self.resolver = resolver
        self.observers = [report_outcome] if observers is None else list(observers)

    def _notify(self, outcome: StepOutcome, network_name: str) -> None:
        for observer in self.observers:
            observer(outcome, network_name)

    def _deploy_step(
        self,
        step: DeploymentStep,
        network_name: str,
        profile: NetworkProfile,
        deployed: Dict[str, DeployedArtifact],
    ) -> StepOutcome:
        constructor_args = step.constructor_args(profile=profile, deployed=deployed)
        result = self.provisioner.provision(step.contract_name, constructor_args)
        if not result.deployed:
            return StepOutcome(
                step=step,
                status=StepStatus.FAILED,
                error=ProvisioningFailed(network_name, step.logical_name, result.error),
            )

        deployed[step.logical_name] = DeployedArtifact(
            logical_name=step.logical_name, address=result.address, deployer=result.deployer
        )
        try:
            self.store.put(network_name, step.logical_name, result.address)
        except StorageUnavailable as e:
            # deployed on chain but not recorded
            return StepOutcome(
                step=step,
                status=StepStatus.FAILED,
                address=result.address,
                deployer=result.deployer,
                error=e,
            )

        return StepOutcome(
            step=step, status=StepStatus.DEPLOYED, address=result.address, deployer=result.deployer
        )

    def run(self, network_name: str) -> RunResult:
        profile = self.resolver(network_name)
        print(f"Deploying {len(self.steps)} contract(s) to '{network_name}' "
              f"with '{profile.network}' profile...")

        deployed: Dict[str, DeployedArtifact] = OrderedDict()
        outcomes: List[StepOutcome] = list()
        for step in self.steps:
            if outcomes and outcomes[-1].status != StepStatus.DEPLOYED:
                outcome = StepOutcome(step=step, status=StepStatus.SKIPPED)
            else:
                outcome = self._deploy_step(step, network_name, profile, deployed)
            outcomes.append(outcome)
            self._notify(outcome, network_name)

        return RunResult(network_name=network_name, profile=profile, outcomes=outcomes)
