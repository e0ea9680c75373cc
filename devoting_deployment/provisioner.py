import typing
from collections import OrderedDict
from typing import Any, List, Optional, Sequence

from ape import networks
from ape.api import AccountAPI
from ape.cli.choices import select_account
from ape.exceptions import ApeException
from web3.auto import w3

from devoting_deployment.confirm import _confirm_resolution, _continue
from devoting_deployment.orchestrator import Provisioner, ProvisioningResult
from devoting_deployment.utils import get_contract_container


class ConstructorArgumentsInvalid(ValueError):
    """Raised when constructor arguments do not match the contract ABI."""


def _validate_constructor_args(
    contract_name: str, abi_inputs: List[Any], args: Sequence[Any]
) -> "OrderedDict[str, Any]":
    """Checks the arguments against the constructor ABI and returns them by name."""
    if len(args) != len(abi_inputs):
        raise ConstructorArgumentsInvalid(
            f"Constructor arguments length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )

    named_args = OrderedDict()
    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, value):
            raise ConstructorArgumentsInvalid(
                f"{contract_name} constructor argument '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match expected ABI type "
                f"'{abi_input.type}'"
            )
        named_args[abi_input.name or f"arg{position}"] = value
    return named_args


class ApeProvisioner(Provisioner):
    """
    Deploys contracts of the ape project with a single account.
    Unless autosign is enabled every deployment is confirmed interactively.
    """

    def __init__(
        self,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
        verify: bool = False,
        required_confirmations: Optional[int] = None,
    ):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        self._account.set_autosign(autosign)
        self.verify = verify
        self.required_confirmations = required_confirmations

    def _get_kwargs(self) -> typing.Dict[str, Any]:
        kwargs = {"publish": self.verify}
        if self.required_confirmations is not None:
            kwargs["required_confirmations"] = self.required_confirmations
        return kwargs

    def print_deployment_info(self) -> None:
        print(
            f"Account: {self._account.address}",
            f"Verify: {self.verify}",
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {networks.provider.network.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            sep="\n",
        )
        if not self._autosign:
            # Confirms the start of the deployment.
            _continue()

    def provision(self, artifact_kind: str, constructor_args: Sequence[Any]) -> ProvisioningResult:
        container = get_contract_container(artifact_kind)
        named_args = _validate_constructor_args(
            contract_name=artifact_kind,
            abi_inputs=container.constructor.abi.inputs,
            args=constructor_args,
        )
        if not self._autosign:
            _confirm_resolution(named_args, artifact_kind)

        try:
            instance = self._account.deploy(container, *constructor_args, **self._get_kwargs())
        except ApeException as e:
            return ProvisioningResult(address="", success=False, error=str(e))

        return ProvisioningResult(
            address=instance.address, success=True, deployer=self._account.address
        )
