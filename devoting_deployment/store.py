from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values, set_key

from devoting_deployment.constants import ADDRESS_KEY_INFIX, DEFAULT_ADDRESS_FILEPATH


class StorageUnavailable(Exception):
    """Raised when the address file cannot be read or written."""


class AddressStore:
    """
    Persists deployed addresses in a .env style file, one
    <LOGICAL_NAME>_ADDRESS<NETWORK_NAME> entry per (network, contract) pair.

    Writing an existing key replaces its value in place; every other
    line of the file is left untouched.
    """

    def __init__(self, filepath: Path = DEFAULT_ADDRESS_FILEPATH):
        self.filepath = Path(filepath)

    @staticmethod
    def key(network_name: str, logical_name: str) -> str:
        # the first infix in a key ends the logical name
        if not logical_name or ADDRESS_KEY_INFIX in logical_name.upper():
            raise ValueError(
                f"Invalid logical name '{logical_name}': must be non-empty and must not "
                f"contain '{ADDRESS_KEY_INFIX}'."
            )
        return f"{logical_name.upper()}{ADDRESS_KEY_INFIX}{network_name.upper()}"

    def _read(self) -> Dict[str, Optional[str]]:
        if not self.filepath.exists():
            return dict()
        try:
            return dotenv_values(self.filepath)
        except OSError as e:
            raise StorageUnavailable(f"Cannot read address file {self.filepath}: {e}") from e

    def put(self, network_name: str, logical_name: str, address: str) -> None:
        if not address:
            raise ValueError(f"Refusing to store an empty address for {logical_name}.")
        key = self.key(network_name=network_name, logical_name=logical_name)
        try:
            set_key(self.filepath, key, address, quote_mode="never")
        except OSError as e:
            raise StorageUnavailable(f"Cannot write address file {self.filepath}: {e}") from e

    def get(self, network_name: str, logical_name: str) -> Optional[str]:
        key = self.key(network_name=network_name, logical_name=logical_name)
        return self._read().get(key) or None

    def addresses(self, network_name: str) -> Dict[str, str]:
        """Returns all stored addresses for a network, keyed by lowercase logical name."""
        result = dict()
        for key, value in self._read().items():
            if not value or ADDRESS_KEY_INFIX not in key:
                continue
            logical_name, key_network = key.split(ADDRESS_KEY_INFIX, 1)
            if logical_name and key_network == network_name.upper():
                result[logical_name.lower()] = value
        return result
