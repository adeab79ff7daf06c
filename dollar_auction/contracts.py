from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path
from typing import List

import boa

CONTRACTS_DIR = Path(__file__).resolve().parent.parent / "contracts"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class Phase(IntFlag):
    """Mirror of the contract's ``Phase`` flag"""

    UNSTARTED = 1
    OPEN = 2
    CLOSED = 4
    SETTLED = 8


@dataclass
class ContractDefinition:
    name: str  # Contract name (e.g., "DollarAuction")
    file_path: str  # Path to contract file, relative to the repo root
    constructor_types: List[str]  # Constructor parameter types
    state_getters: List[str] = field(default_factory=list)  # List of state functions to call

    @property
    def source(self) -> Path:
        return CONTRACTS_DIR.parent / self.file_path

    def load_partial(self):
        """Compile the contract and return its deployer"""
        return boa.load_partial(str(self.source))


CONTRACTS = {
    "dollar_auction": ContractDefinition(
        name="DollarAuction",
        file_path="contracts/DollarAuction.vy",
        constructor_types=["uint256", "uint256", "uint256", "uint256", "bool", "address"],
        state_getters=["operator", "prize", "deadline", "minimum_bid", "phase"],
    ),
}
