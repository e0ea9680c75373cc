from pathlib import Path

import click

from devoting_deployment.constants import ADDRESS_FILE_ENVVAR, DEFAULT_ADDRESS_FILEPATH

address_file_option = click.option(
    "--address-file",
    "-f",
    help="Path of the .env file that records deployed addresses.",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=ADDRESS_FILE_ENVVAR,
    default=DEFAULT_ADDRESS_FILEPATH,
    show_default=True,
)

ape_network_option = click.option(
    "--ape-network",
    "-n",
    help="ape network choice to connect with, e.g. ethereum:local:node. "
    "Defaults to the one in the network profile.",
    type=str,
    required=False,
)

account_option = click.option(
    "--account",
    "-a",
    "account_alias",
    help="Alias of the ape account to deploy with. Required on live networks.",
    type=str,
    required=False,
)

autosign_option = click.option(
    "--autosign",
    help="Automatically sign transactions.",
    is_flag=True,
)

verify_option = click.option(
    "--verify",
    help="Publish contract sources to the block explorer.",
    is_flag=True,
)
