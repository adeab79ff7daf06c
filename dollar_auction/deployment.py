"""Deploy the auction with boa and record what was deployed."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import boa
import yaml
from eth_abi import encode
from eth_account import Account
from web3 import Web3

from .config import AuctionConfig
from .contracts import CONTRACTS, ZERO_ADDRESS, ContractDefinition
from .errors import ConfigError

logger = logging.getLogger(__name__)

LOCAL_NETWORK = "local"


@dataclass
class DeploymentConfig:
    network: str = LOCAL_NETWORK
    rpc_url: Optional[str] = None
    fork_mode: bool = False
    deploy_mode: bool = True
    fund: bool = True
    operator: Optional[str] = None
    output_dir: str = "deployment"

    @property
    def is_local(self) -> bool:
        return not self.rpc_url

    @property
    def is_simulated(self) -> bool:
        """Local EVM or fork: balances can be set freely"""
        return self.is_local or self.fork_mode


def setup_environment(config: DeploymentConfig):
    """Setup boa environment based on configuration

    Without an RPC URL everything stays on boa's local EVM. A fork keeps
    boa's default account; a live network deploys from ``ADMIN_PRIVATE_KEY``.
    """
    if config.is_local:
        logger.info("Using local EVM, deployer %s", boa.env.eoa)
        return

    if config.fork_mode:
        boa.fork(config.rpc_url)
        logger.info("Forked %s at %s", config.network, boa.env.eoa)
        return

    private_key = os.getenv("ADMIN_PRIVATE_KEY")
    if not private_key:
        raise ConfigError(f"ADMIN_PRIVATE_KEY is required to deploy to {config.network}")
    acct = Account.from_key(private_key)
    boa.set_network_env(config.rpc_url)
    boa.env.add_account(acct)
    logger.info("Connected to %s as %s", config.network, acct.address)


def encode_constructor_args(types: List[str], values: List[Any]) -> str:
    w3 = Web3()
    processed_values = [
        w3.to_checksum_address(val) if isinstance(val, str) and val.startswith("0x") else val
        for val in values
    ]
    return "0x" + encode(types, processed_values).hex()


def constructor_params(config: AuctionConfig, operator: Optional[str] = None) -> Dict[str, Any]:
    """Constructor arguments in declaration order; a zero operator means the deployer"""
    return {
        "prize": config.prize,
        "auction_duration": config.auction_duration,
        "min_increment": config.min_increment,
        "anti_snipe_window": config.anti_snipe_window,
        "pull_refunds": config.pull_refunds,
        "operator": operator or ZERO_ADDRESS,
    }


def _plain(value):
    # boa hands back str subclasses for addresses and tuples for structs
    if isinstance(value, str):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def read_state(instance, getters: List[str]) -> Dict[str, Any]:
    return {getter: _plain(getattr(instance, getter)()) for getter in getters}


def deploy_contract(
    contract_def: ContractDefinition, deployment_params: Dict[str, Any]
) -> Dict[str, Any]:
    """Deploy a single contract and return its deployment info"""
    args = list(deployment_params.values())
    contract = contract_def.load_partial()
    constructor_args = encode_constructor_args(contract_def.constructor_types, args)

    instance = contract.deploy(*args)
    logger.info("%s deployed at %s", contract_def.name, instance.address)

    return {
        "instance": instance,
        "address": str(instance.address),
        "constructor_args": constructor_args,
        "params": {name: _plain(value) for name, value in deployment_params.items()},
        "state": read_state(instance, contract_def.state_getters),
    }


def deploy_auction(
    config: AuctionConfig, operator: Optional[str] = None, fund: bool = True
) -> Dict[str, Any]:
    """Deploy from the current account and, with ``fund``, send the prize along with ``start``"""
    contract_def = CONTRACTS["dollar_auction"]
    deployment = deploy_contract(contract_def, constructor_params(config, operator))

    if fund:
        instance = deployment["instance"]
        instance.start(value=config.prize)
        deployment["state"] = read_state(instance, contract_def.state_getters)
        logger.info("Auction open until %s", deployment["state"]["deadline"])

    return deployment


def run(config: DeploymentConfig, auction_config: AuctionConfig) -> Optional[Path]:
    """Deploy and record an auction; a dry run only compiles and encodes the arguments"""
    setup_environment(config)
    contract_def = CONTRACTS["dollar_auction"]

    if not config.deploy_mode:
        contract_def.load_partial()
        params = constructor_params(auction_config, config.operator)
        logger.info(
            "Dry run - %s compiled, constructor arguments %s",
            contract_def.name,
            encode_constructor_args(contract_def.constructor_types, list(params.values())),
        )
        return None

    if config.fund and config.is_simulated:
        deployer = boa.env.eoa
        boa.env.set_balance(deployer, boa.env.get_balance(deployer) + auction_config.prize)

    deployments = {"dollar_auction": deploy_auction(auction_config, config.operator, config.fund)}
    return save_deployment_info(deployments, config.network, config.fork_mode, config.output_dir)


def save_deployment_info(
    deployments: Dict[str, Dict[str, Any]],
    network: str,
    is_fork: bool = False,
    base_dir: Union[str, Path] = "deployment",
) -> Path:
    """Save all deployment information to YAML"""
    network_dir = network.lower() + ("-fork" if is_fork else "")
    chain_dir = Path(base_dir) / network_dir
    chain_dir.mkdir(parents=True, exist_ok=True)

    date_str = datetime.now().strftime("%Y%m%d")
    deployment_record = {
        "network": network,
        "fork": is_fork,
        "deployment_timestamp": datetime.now().isoformat(),
        "contracts": {},
    }

    for contract_id, deployment_data in deployments.items():
        contract_def = CONTRACTS[contract_id]
        deployment_record["contracts"][contract_id] = {
            "name": contract_def.name,
            "address": deployment_data["address"],
            "constructor_arguments": deployment_data.get("constructor_args"),
            "deployment_parameters": deployment_data.get("params", {}),
            "contract_state": deployment_data.get("state", {}),
        }

    path = chain_dir / f"{date_str}_deployment.yaml"
    with open(path, "w") as f:
        yaml.dump(deployment_record, f, default_flow_style=False, sort_keys=False)
    logger.info("Deployment info saved to %s", path)
    return path
