import pytest
import yaml

from devoting_deployment.constants import DEVNET, MAINNET, MUMBAI, RINKEBY
from devoting_deployment.networks import (
    NetworkProfile,
    get_default_network,
    get_network_names,
    resolve_network_profile,
)
from devoting_deployment.utils import DeploymentConfigError


def write_profiles(path, profiles, default="devnet"):
    path.write_text(yaml.safe_dump({"default": default, "profiles": profiles}))
    return path


DEVNET_DATA = {
    "name": "Local",
    "symbol": "LOC",
    "uri": "http://localhost/{id}",
    "token_ids": [1, 2, 3],
    "token_supplies": [10, 10, 10],
}


CONFIGURED_PROFILES = {
    MAINNET: NetworkProfile(
        network=MAINNET,
        name="dEvoting",
        symbol="DVOTE",
        uri="https://api.devoting.io/metadata/{id}.json",
        token_ids=(1, 2, 3),
        token_supplies=(1000, 1000, 1000),
        chain_id=1,
        ape_network="ethereum:mainnet:infura",
        required_confirmations=1,
    ),
    RINKEBY: NetworkProfile(
        network=RINKEBY,
        name="dEvoting Rinkeby",
        symbol="tDVOTE",
        uri="https://testnet-api.devoting.io/metadata/{id}.json",
        token_ids=(1, 2, 3),
        token_supplies=(100, 100, 100),
        chain_id=4,
        ape_network="ethereum:rinkeby:infura",
        required_confirmations=1,
    ),
    MUMBAI: NetworkProfile(
        network=MUMBAI,
        name="dEvoting Mumbai",
        symbol="mDVOTE",
        uri="https://testnet-api.devoting.io/metadata/{id}.json",
        token_ids=(1, 2, 3),
        token_supplies=(100, 100, 100),
        chain_id=80001,
        ape_network="polygon:mumbai:infura",
        required_confirmations=2,
    ),
    DEVNET: NetworkProfile(
        network=DEVNET,
        name="dEvoting Devnet",
        symbol="dDVOTE",
        uri="http://localhost:3000/metadata/{id}.json",
        token_ids=(1, 2, 3),
        token_supplies=(10, 10, 10),
        chain_id=None,
        ape_network="ethereum:local:node",
        required_confirmations=0,
    ),
}


@pytest.mark.parametrize("network_name", [MAINNET, RINKEBY, MUMBAI, DEVNET])
def test_known_networks_resolve_to_their_configured_profile(network_name):
    assert resolve_network_profile(network_name) == CONFIGURED_PROFILES[network_name]


def test_configured_networks():
    assert get_network_names() == [MAINNET, RINKEBY, MUMBAI, DEVNET]
    assert get_default_network() == DEVNET


def test_default_profile_values():
    profile = resolve_network_profile(DEVNET)
    assert profile.token_ids == (1, 2, 3)
    assert profile.token_supplies == (10, 10, 10)
    assert profile.chain_id is None


def test_mumbai_is_not_the_default_profile():
    mumbai = resolve_network_profile(MUMBAI)
    devnet = resolve_network_profile(DEVNET)
    assert mumbai.chain_id == 80001
    assert mumbai != devnet


@pytest.mark.parametrize("network_name", ["development", "", "MAINNET", "goerli", "polygon-main"])
def test_unknown_networks_fall_back_to_default(network_name, capsys):
    profile = resolve_network_profile(network_name)
    assert profile == resolve_network_profile(DEVNET)
    assert "using 'devnet' profile" in capsys.readouterr().out


def test_profile_is_immutable():
    profile = resolve_network_profile(MAINNET)
    with pytest.raises(AttributeError):
        profile.symbol = "NOPE"
    with pytest.raises(TypeError):
        profile.token_ids[0] = 42  # noqa


def test_each_resolution_builds_a_fresh_profile():
    first = resolve_network_profile(RINKEBY)
    second = resolve_network_profile(RINKEBY)
    assert first == second
    assert first is not second


def test_profiles_from_custom_file(tmp_path):
    filepath = write_profiles(
        tmp_path / "profiles.yml",
        {"devnet": DEVNET_DATA, "staging": dict(DEVNET_DATA, name="Staging", chain_id="5")},
    )
    staging = resolve_network_profile("staging", filepath=filepath)
    assert staging.name == "Staging"
    assert staging.chain_id == 5

    fallback = resolve_network_profile("unknown", filepath=filepath)
    assert fallback.network == "devnet"
    assert fallback.name == "Local"


def test_mismatched_token_lengths_are_rejected(tmp_path):
    filepath = write_profiles(
        tmp_path / "profiles.yml", {"devnet": dict(DEVNET_DATA, token_supplies=[10, 10])}
    )
    with pytest.raises(DeploymentConfigError, match="3 token ids but 2 token supplies"):
        resolve_network_profile("devnet", filepath=filepath)


def test_missing_profile_field_is_rejected():
    data = dict(DEVNET_DATA)
    del data["symbol"]
    with pytest.raises(DeploymentConfigError, match="missing field"):
        NetworkProfile.from_config(network="devnet", data=data)


def test_default_must_have_a_profile(tmp_path):
    filepath = write_profiles(tmp_path / "profiles.yml", {"devnet": DEVNET_DATA}, default="local")
    with pytest.raises(DeploymentConfigError, match="Default network 'local'"):
        resolve_network_profile("devnet", filepath=filepath)
