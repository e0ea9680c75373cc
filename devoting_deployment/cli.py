import click
from ape import networks

from devoting_deployment.networks import (
    get_default_network,
    get_network_names,
    resolve_network_profile,
)
from devoting_deployment.options import (
    account_option,
    address_file_option,
    ape_network_option,
    autosign_option,
    verify_option,
)
from devoting_deployment.orchestrator import (
    DeploymentOrchestrator,
    ProvisioningFailed,
    RunResult,
)
from devoting_deployment.provisioner import ApeProvisioner
from devoting_deployment.store import AddressStore, StorageUnavailable
from devoting_deployment.types import ChecksumAddress
from devoting_deployment.utils import check_chain_id, check_plugins, get_account


def _print_summary(result: RunResult) -> None:
    print(f"\nDeployment summary for '{result.network_name}':")
    for outcome in result.outcomes:
        address = outcome.address or "-"
        print(f"\t{outcome.step.logical_name} ({outcome.step.contract_name}): "
              f"{outcome.status.value} {address}")


@click.group()
def cli():
    """dEvoting contract deployment."""


@cli.command()
@click.argument("network_name")
@ape_network_option
@account_option
@autosign_option
@verify_option
@address_file_option
def deploy(network_name, ape_network, account_alias, autosign, verify, address_file):
    """
    Deploy dEvotingNFT and dEvoting to NETWORK_NAME.

    Networks without a profile deploy with the default profile.
    """
    profile = resolve_network_profile(network_name)
    ape_network = ape_network or profile.ape_network
    if not ape_network:
        raise click.BadOptionUsage(
            option_name="--ape-network",
            message=f"No ape network configured for profile '{profile.network}'.",
        )

    with networks.parse_network_choice(ape_network):
        check_chain_id(profile)
        check_plugins(verify)
        provisioner = ApeProvisioner(
            account=get_account(account_alias),
            autosign=autosign,
            verify=verify,
            required_confirmations=profile.required_confirmations,
        )
        provisioner.print_deployment_info()
        orchestrator = DeploymentOrchestrator(
            provisioner=provisioner,
            store=AddressStore(address_file),
            resolver=lambda _: profile,
        )
        result = orchestrator.run(network_name)

    _print_summary(result)
    try:
        result.raise_for_failure()
    except ProvisioningFailed as e:
        raise click.ClickException(str(e))
    except StorageUnavailable as e:
        failure = result.failure
        raise click.ClickException(
            f"{failure.step.logical_name} was deployed at {failure.address} on network "
            f"'{network_name}' but its address could not be recorded: {e}"
        )
    print(f"(i) Addresses recorded in {address_file}")


@cli.group()
def addresses():
    """Inspect and edit recorded addresses."""


@addresses.command("show")
@click.argument("network_name")
@address_file_option
def show_addresses(network_name, address_file):
    """Print the addresses recorded for NETWORK_NAME."""
    store = AddressStore(address_file)
    try:
        recorded = store.addresses(network_name)
    except StorageUnavailable as e:
        raise click.ClickException(str(e))
    if not recorded:
        print(f"No addresses recorded for '{network_name}' in {address_file}")
        return
    for logical_name, address in recorded.items():
        print(f"{store.key(network_name, logical_name)}={address}")


@addresses.command("set")
@click.argument("network_name")
@click.argument("logical_name")
@click.argument("address", type=ChecksumAddress())
@address_file_option
def set_address(network_name, logical_name, address, address_file):
    """Record ADDRESS for LOGICAL_NAME on NETWORK_NAME, replacing any previous value."""
    store = AddressStore(address_file)
    try:
        store.put(network_name, logical_name, address)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="LOGICAL_NAME")
    except StorageUnavailable as e:
        raise click.ClickException(str(e))
    print(f"{store.key(network_name, logical_name)}={address}")


@cli.command("networks")
def list_networks():
    """List networks with a deployment profile."""
    default = get_default_network()
    for name in get_network_names():
        marker = " (default)" if name == default else ""
        print(f"{name}{marker}")


if __name__ == "__main__":
    cli()
