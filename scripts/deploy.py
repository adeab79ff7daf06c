import logging
import os
import sys

from dotenv import load_dotenv

from dollar_auction import load_config
from dollar_auction.deployment import DeploymentConfig, run


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes")


def main(config_path=None):
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    # Configuration
    config = DeploymentConfig(
        network=os.getenv("DOLLAR_AUCTION_NETWORK", "local"),
        rpc_url=os.getenv("DOLLAR_AUCTION_RPC_URL"),
        fork_mode=env_flag("DOLLAR_AUCTION_FORK"),
        deploy_mode=not env_flag("DOLLAR_AUCTION_DRY_RUN"),
        fund=env_flag("DOLLAR_AUCTION_FUND", default=True),
        operator=os.getenv("DOLLAR_AUCTION_OPERATOR"),
    )
    auction_config = load_config(config_path)
    print(f"Auction parameters: {auction_config.as_dict()}")

    path = run(config, auction_config)
    if path is None:
        print("Dry run mode - no contracts were deployed")
    else:
        print(f"\nDeployment info saved to: {path}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
