import os
from pathlib import Path
from typing import Optional

import yaml
from ape import accounts, networks, project
from ape.api import AccountAPI
from ape.contracts import ContractContainer

from devoting_deployment.constants import LOCAL_NETWORK_NAME


class DeploymentConfigError(ValueError):
    pass


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def is_local_network() -> bool:
    return networks.provider.network.name == LOCAL_NETWORK_NAME


def check_chain_id(profile) -> None:
    """
    Checks that the connected chain is the one the profile was written for.
    Profiles without a chain_id deploy anywhere.
    """
    if profile.chain_id is None or is_local_network():
        return
    connected_chain_id = networks.provider.network.chain_id
    if profile.chain_id != connected_chain_id:
        raise DeploymentConfigError(
            f"chain_id in '{profile.network}' profile ({profile.chain_id}) does not match "
            f"chain_id of current network ({connected_chain_id})."
        )


def check_etherscan_plugin() -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the explorer API key environment variable of the ecosystem is set.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    try:
        from ape_etherscan.utils import API_KEY_ENV_KEY_MAP
    except ImportError:
        raise ImportError("Please install the ape-etherscan plugin to verify contracts.")
    ecosystem_name = networks.provider.network.ecosystem.name
    explorer_envvar = API_KEY_ENV_KEY_MAP.get(ecosystem_name)
    if not explorer_envvar:
        raise ValueError(f"No explorer API key known for ecosystem '{ecosystem_name}'.")
    api_key = os.environ.get(explorer_envvar)
    if not api_key:
        raise ValueError(f"{explorer_envvar} is not set.")


def check_infura_plugin() -> None:
    """Checks that the ape-infura plugin is installed and has an API key."""
    if is_local_network():
        return  # unnecessary for local deployment
    if networks.provider.name != "infura":
        return  # unnecessary when using a provider different than infura
    try:
        from ape_infura.provider import _ENVIRONMENT_VARIABLE_NAMES
    except ImportError:
        raise ImportError("Please install the ape-infura plugin to deploy through infura.")
    for envvar in _ENVIRONMENT_VARIABLE_NAMES:
        if os.environ.get(envvar):
            break
    else:
        raise ValueError(
            f"No Infura API key found in "
            f"environment variables: {', '.join(_ENVIRONMENT_VARIABLE_NAMES)}"
        )


def check_plugins(verify: bool) -> None:
    print("Checking plugins...")
    if verify:
        check_etherscan_plugin()
    check_infura_plugin()


def _get_dependency_contract_container(contract: str) -> ContractContainer:
    for dependency_name, dependency_versions in project.dependencies.items():
        if len(dependency_versions) > 1:
            raise DeploymentConfigError(f"Ambiguous {dependency_name} dependency for {contract}")
        dependency_api = list(dependency_versions.values())[0]
        try:
            return getattr(dependency_api, contract)
        except AttributeError:
            continue
    raise DeploymentConfigError(f"No contract found with name '{contract}'.")


def get_contract_container(contract: str) -> ContractContainer:
    try:
        contract_container = getattr(project, contract)
    except AttributeError:
        # not in root project; check dependencies
        contract_container = _get_dependency_contract_container(contract)

    return contract_container


def get_account(alias: Optional[str]) -> AccountAPI:
    """
    Returns the deploying account: the first test account on local
    networks unless an alias is given, a stored account otherwise.
    """
    if alias is not None:
        return accounts.load(alias)
    if is_local_network():
        return accounts.test_accounts[0]
    raise ValueError("Must specify an account alias when deploying to live networks")
