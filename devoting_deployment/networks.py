from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple

from devoting_deployment.constants import NETWORK_PROFILES_FILEPATH
from devoting_deployment.utils import DeploymentConfigError, _load_yaml

PROFILES_KEY = "profiles"
DEFAULT_KEY = "default"


class NetworkProfile(NamedTuple):
    """Deployment parameters for a single network."""

    network: str
    name: str
    symbol: str
    uri: str
    token_ids: Tuple[int, ...]
    token_supplies: Tuple[int, ...]
    chain_id: Optional[int] = None
    ape_network: Optional[str] = None
    required_confirmations: int = 0

    @classmethod
    def from_config(cls, network: str, data: Dict) -> "NetworkProfile":
        try:
            token_ids = tuple(int(token_id) for token_id in data["token_ids"])
            token_supplies = tuple(int(supply) for supply in data["token_supplies"])
            profile = cls(
                network=network,
                name=str(data["name"]),
                symbol=str(data["symbol"]),
                uri=str(data["uri"]),
                token_ids=token_ids,
                token_supplies=token_supplies,
                chain_id=None if data.get("chain_id") is None else int(data["chain_id"]),
                ape_network=data.get("ape_network"),
                required_confirmations=int(data.get("required_confirmations") or 0),
            )
        except KeyError as e:
            raise DeploymentConfigError(f"Profile '{network}' is missing field {e}.")
        except (TypeError, ValueError) as e:
            raise DeploymentConfigError(f"Malformed profile '{network}': {e}")

        if len(profile.token_ids) != len(profile.token_supplies):
            raise DeploymentConfigError(
                f"Profile '{network}' has {len(profile.token_ids)} token ids "
                f"but {len(profile.token_supplies)} token supplies."
            )
        return profile


def _load_profiles_config(filepath: Path) -> Tuple[str, Dict[str, Dict]]:
    config = _load_yaml(filepath) or dict()
    profiles = config.get(PROFILES_KEY)
    if not profiles:
        raise DeploymentConfigError(f"No network profiles found in {filepath}.")

    default = config.get(DEFAULT_KEY)
    if default not in profiles:
        raise DeploymentConfigError(
            f"Default network '{default}' has no profile in {filepath}."
        )
    return default, profiles


def get_network_names(filepath: Path = NETWORK_PROFILES_FILEPATH) -> List[str]:
    """Returns the names of all networks with a configured profile."""
    _, profiles = _load_profiles_config(filepath)
    return list(profiles)


def get_default_network(filepath: Path = NETWORK_PROFILES_FILEPATH) -> str:
    default, _ = _load_profiles_config(filepath)
    return default


def resolve_network_profile(
    network_name: str, filepath: Path = NETWORK_PROFILES_FILEPATH
) -> NetworkProfile:
    """
    Returns the deployment profile for a network.

    Lookup is an exact match on the network name. Networks without a
    configured profile get the default profile; this never fails for
    an unknown name.
    """
    default, profiles = _load_profiles_config(filepath)
    if network_name in profiles:
        return NetworkProfile.from_config(network=network_name, data=profiles[network_name])

    print(f"(i) No profile for network '{network_name}'; using '{default}' profile.")
    return NetworkProfile.from_config(network=default, data=profiles[default])
