from typing import Any, Dict, FrozenSet, List, NamedTuple, Sequence, Tuple

from devoting_deployment.constants import (
    ADDRESS_KEY_INFIX,
    DEVOTING,
    DEVOTING_NFT,
    PRIMARY,
    SECONDARY,
)
from devoting_deployment.networks import NetworkProfile
from devoting_deployment.utils import DeploymentConfigError

VARIABLE_PREFIX = "$"

# profile fields that may be passed to a constructor
CONSTRUCTOR_PROFILE_FIELDS = ("name", "symbol", "uri", "token_ids", "token_supplies")


def is_variable(source: Any) -> bool:
    """Returns True if the constructor source references another deployment."""
    return isinstance(source, str) and source.startswith(VARIABLE_PREFIX)


class DeploymentStep(NamedTuple):
    """
    One contract deployment. Constructor sources are resolved in order;
    a source is either a NetworkProfile field name or "$<logical_name>"
    for the address of a contract deployed earlier in the same run.
    """

    logical_name: str
    contract_name: str
    constructor: Tuple[str, ...] = ()

    @property
    def depends_on(self) -> FrozenSet[str]:
        return frozenset(s[len(VARIABLE_PREFIX):] for s in self.constructor if is_variable(s))

    @property
    def profile_fields(self) -> Tuple[str, ...]:
        return tuple(s for s in self.constructor if not is_variable(s))

    def constructor_args(self, profile: NetworkProfile, deployed: Dict[str, Any]) -> List[Any]:
        """
        Builds the positional constructor arguments from the profile and
        from artifacts deployed earlier in this run, keyed by logical name.
        """
        args = list()
        for source in self.constructor:
            if is_variable(source):
                dependency = source[len(VARIABLE_PREFIX):]
                try:
                    args.append(deployed[dependency].address)
                except KeyError:
                    raise DeploymentConfigError(
                        f"{self.logical_name} requires {dependency}, "
                        f"which has not been deployed in this run."
                    )
            else:
                value = getattr(profile, source)
                args.append(list(value) if isinstance(value, tuple) else value)
        return args


DEPLOYMENT_STEPS = (
    DeploymentStep(
        logical_name=PRIMARY,
        contract_name=DEVOTING_NFT,
        constructor=("name", "symbol", "uri", "token_ids", "token_supplies"),
    ),
    DeploymentStep(
        logical_name=SECONDARY,
        contract_name=DEVOTING,
        constructor=(f"{VARIABLE_PREFIX}{PRIMARY}", "token_ids"),
    ),
)


def validate_steps(steps: Sequence[DeploymentStep]) -> None:
    """
    Checks that logical names are unique, that every dependency is deployed
    by an earlier step and that every other source is a profile field.
    """
    if not steps:
        raise DeploymentConfigError("No deployment steps defined.")

    earlier = list()
    for step in steps:
        if step.logical_name in earlier:
            raise DeploymentConfigError(f"Duplicate deployment step '{step.logical_name}'.")
        if ADDRESS_KEY_INFIX in step.logical_name.upper():
            raise DeploymentConfigError(
                f"Step name '{step.logical_name}' must not contain '{ADDRESS_KEY_INFIX}'."
            )

        for dependency in sorted(step.depends_on):
            if dependency not in earlier:
                raise DeploymentConfigError(
                    f"Step '{step.logical_name}' depends on '{dependency}', "
                    f"which is not deployed by an earlier step."
                )

        for field in step.profile_fields:
            if field not in CONSTRUCTOR_PROFILE_FIELDS:
                raise DeploymentConfigError(
                    f"Step '{step.logical_name}' uses unknown profile field '{field}'."
                )

        earlier.append(step.logical_name)
