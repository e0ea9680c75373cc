from typing import Any, Mapping

from ape.utils import ZERO_ADDRESS


def _ask(question: str) -> None:
    """Exits if the user answers 'n'."""
    answer = input(f"{question} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)


def _continue() -> None:
    _ask("Continue")


def _confirm_resolution(named_args: Mapping[str, Any], contract_name: str) -> None:
    """Shows the constructor arguments of a contract and asks to deploy it."""
    if not named_args:
        print(f"\n(i) No constructor parameters for {contract_name}")
    else:
        print(f"\nConstructor parameters for {contract_name}")
        for name, value in named_args.items():
            print(f"\t{name}={value}")

    _ask(f"Deploy {contract_name}")
    if ZERO_ADDRESS in named_args.values():
        _ask("Zero Address detected for deployment parameter; Continue?")
