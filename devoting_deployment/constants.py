from pathlib import Path

import devoting_deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(devoting_deployment.__file__).parent
NETWORK_PROFILES_FILEPATH = DEPLOYMENT_DIR / "network_profiles.yml"
# relative to the directory the command runs in
DEFAULT_ADDRESS_FILEPATH = Path(".env")
ADDRESS_FILE_ENVVAR = "DEVOTING_ADDRESS_FILE"

#
# Networks
#

MAINNET = "mainnet"
RINKEBY = "rinkeby"
MUMBAI = "mumbai"
DEVNET = "devnet"

LOCAL_NETWORK_NAME = "local"

#
# Contracts
#

DEVOTING_NFT = "dEvotingNFT"
DEVOTING = "dEvoting"

PRIMARY = "primary"
SECONDARY = "secondary"

# <LOGICAL_NAME>_ADDRESS<NETWORK_NAME>
ADDRESS_KEY_INFIX = "_ADDRESS"
