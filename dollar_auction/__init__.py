from .config import REFUND_PULL, REFUND_PUSH, AuctionConfig, load_config
from .contracts import CONTRACTS, ZERO_ADDRESS, ContractDefinition, Phase
from .errors import ConfigError, InvariantViolation
from .invariants import InvariantChecker

__version__ = "0.1.0"
