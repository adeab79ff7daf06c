"""Auction parameters and how they are loaded."""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv
from eth_utils import to_wei

from .errors import ConfigError

REFUND_PUSH = "push"
REFUND_PULL = "pull"
REFUND_MODES = (REFUND_PUSH, REFUND_PULL)

ENV_PREFIX = "DOLLAR_AUCTION_"
ENV_CONFIG_PATH = ENV_PREFIX + "CONFIG"

# Field name -> environment variable suffix
_ENV_FIELDS = {
    "prize": "PRIZE",
    "auction_duration": "DURATION",
    "min_increment": "MIN_INCREMENT",
    "anti_snipe_window": "ANTI_SNIPE_WINDOW",
    "refund_mode": "REFUND_MODE",
}

_AMOUNT_FIELDS = ("prize", "min_increment")
_DURATION_FIELDS = ("auction_duration", "anti_snipe_window")


@dataclass(frozen=True)
class AuctionConfig:
    prize: int = to_wei(1, "ether")
    auction_duration: int = 24 * 60 * 60
    min_increment: int = to_wei("0.05", "ether")
    anti_snipe_window: int = 15 * 60
    refund_mode: str = REFUND_PUSH

    def __post_init__(self):
        for name in _AMOUNT_FIELDS + _DURATION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if self.min_increment == 0:
            raise ConfigError("min_increment must be positive")
        if self.auction_duration == 0:
            raise ConfigError("auction_duration must be positive")
        if self.refund_mode not in REFUND_MODES:
            raise ConfigError(f"refund_mode must be one of {REFUND_MODES}, got {self.refund_mode!r}")

    @property
    def pull_refunds(self) -> bool:
        return self.refund_mode == REFUND_PULL

    def as_dict(self) -> Dict[str, Any]:
        return {field.name: getattr(self, field.name) for field in fields(self)}


def parse_amount(value: Union[int, str]) -> int:
    """Accept wei as an int (or digit string) or a "<number> <unit>" string."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid amount: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    parts = text.split()
    if len(parts) != 2:
        raise ConfigError(f"Invalid amount: {value!r}")
    number, unit = parts
    try:
        return to_wei(number, unit.lower())
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ConfigError(f"Invalid amount: {value!r}") from e


def parse_duration(value: Union[int, str]) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid duration: {value!r}")
    try:
        return int(value)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid duration: {value!r}") from e


def _coerce(raw: Dict[str, Any]) -> Dict[str, Any]:
    known = {field.name for field in fields(AuctionConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
    values = {}
    for name, value in raw.items():
        if name in _AMOUNT_FIELDS:
            values[name] = parse_amount(value)
        elif name in _DURATION_FIELDS:
            values[name] = parse_duration(value)
        else:
            values[name] = str(value).lower()
    return values


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    # Allow the parameters either at top level or under an "auction" key
    return data.get("auction", data)


def _env_overrides() -> Dict[str, str]:
    overrides = {}
    for name, suffix in _ENV_FIELDS.items():
        value = os.getenv(ENV_PREFIX + suffix)
        if value:
            overrides[name] = value
    return overrides


def load_config(path: Optional[Union[str, Path]] = None, use_env: bool = True) -> AuctionConfig:
    """Build an ``AuctionConfig`` from YAML plus environment overrides.

    The file comes from ``path`` or ``DOLLAR_AUCTION_CONFIG``; with neither,
    only defaults and environment variables apply.
    """
    if use_env:
        load_dotenv(find_dotenv(usecwd=True))
    raw: Dict[str, Any] = {}
    if path is None and use_env:
        path = os.getenv(ENV_CONFIG_PATH)
    if path:
        raw.update(_load_yaml(Path(path)))
    if use_env:
        raw.update(_env_overrides())
    return replace(AuctionConfig(), **_coerce(raw))
