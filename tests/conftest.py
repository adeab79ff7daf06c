import boa
import pytest
from eth_utils import to_wei

from dollar_auction import CONTRACTS, REFUND_PULL, AuctionConfig
from dollar_auction.contracts import CONTRACTS_DIR
from dollar_auction.deployment import constructor_params

# Default auction parameters
DEFAULT_PRIZE = to_wei(1, "ether")
DEFAULT_DURATION = 86400  # 24 hours
DEFAULT_MIN_INCREMENT = to_wei("0.05", "ether")
DEFAULT_ANTI_SNIPE_WINDOW = 900  # 15 minutes
DEFAULT_USER_BALANCE = to_wei(100, "ether")


# Fixtures for default values
@pytest.fixture(scope="session")
def default_prize():
    return DEFAULT_PRIZE


@pytest.fixture(scope="session")
def default_duration():
    return DEFAULT_DURATION


@pytest.fixture(scope="session")
def default_min_increment():
    return DEFAULT_MIN_INCREMENT


@pytest.fixture(scope="session")
def default_anti_snipe_window():
    return DEFAULT_ANTI_SNIPE_WINDOW


@pytest.fixture(autouse=True)
def state_anchor():
    """Automatically anchor state between tests"""
    with boa.env.anchor():
        yield


@pytest.fixture(scope="session")
def make_user():
    def _make_user(balance: int = DEFAULT_USER_BALANCE):
        addr = boa.env.generate_address()
        boa.env.set_balance(addr, balance)
        return addr

    return _make_user


@pytest.fixture(scope="session")
def deployer():
    return boa.env.generate_address()


@pytest.fixture(scope="session")
def alice(make_user):
    return make_user()


@pytest.fixture(scope="session")
def bob(make_user):
    return make_user()


@pytest.fixture(scope="session")
def charlie(make_user):
    return make_user()


@pytest.fixture(scope="session")
def auction_config():
    return AuctionConfig(
        prize=DEFAULT_PRIZE,
        auction_duration=DEFAULT_DURATION,
        min_increment=DEFAULT_MIN_INCREMENT,
        anti_snipe_window=DEFAULT_ANTI_SNIPE_WINDOW,
    )


@pytest.fixture(scope="session")
def pull_config(auction_config):
    return AuctionConfig(**{**auction_config.as_dict(), "refund_mode": REFUND_PULL})


@pytest.fixture(scope="session")
def auction_contract():
    """Cache the contract bytecode"""
    return CONTRACTS["dollar_auction"].load_partial()


@pytest.fixture(scope="session")
def bidder_contract():
    return boa.load_partial(str(CONTRACTS_DIR / "test" / "ScriptedBidder.vy"))


@pytest.fixture(scope="session")
def deploy_auction(auction_contract, deployer):
    def _deploy(config, operator=None):
        with boa.env.prank(deployer):
            return auction_contract.deploy(*constructor_params(config, operator).values())

    return _deploy


@pytest.fixture(scope="session")
def base_auction(deploy_auction, auction_config):
    return deploy_auction(auction_config)


@pytest.fixture(scope="session")
def base_pull_auction(deploy_auction, pull_config):
    return deploy_auction(pull_config)


@pytest.fixture(scope="session")
def fund_and_start(deployer):
    def _start(house):
        boa.env.set_balance(deployer, house.prize())
        with boa.env.prank(deployer):
            house.start(value=house.prize())
        return house

    return _start


@pytest.fixture
def auction(base_auction):
    """Deployed but not yet funded or started"""
    return base_auction


@pytest.fixture
def started_auction(auction, fund_and_start):
    """Fund the prize and open bidding"""
    return fund_and_start(auction)


@pytest.fixture
def pull_auction(base_pull_auction, fund_and_start):
    return fund_and_start(base_pull_auction)


@pytest.fixture(scope="session")
def place_bid():
    def _place_bid(house, bidder, amount):
        with boa.env.prank(bidder):
            house.create_bid(value=amount)

    return _place_bid


@pytest.fixture(scope="session")
def end_auction():
    def _end_auction(house):
        boa.env.time_travel(seconds=house.remaining_time() + 1)

    return _end_auction


@pytest.fixture(scope="session")
def event_names():
    def _event_names(house):
        """Names of the events logged by the last call"""
        return [repr(log).split("(")[0] for log in house.get_logs()]

    return _event_names


@pytest.fixture(scope="session")
def Reaction():
    class ReactionFlags:
        ACCEPT = 1
        REFUSE = 2
        REBID = 4
        SETTLE = 8
        WITHDRAW = 16

    return ReactionFlags


@pytest.fixture(scope="session")
def make_bidder(bidder_contract):
    """Deploy a contract bidder holding ``balance`` wei"""

    def _make_bidder(house, balance: int = DEFAULT_USER_BALANCE):
        bidder = bidder_contract.deploy(house.address)
        boa.env.set_balance(bidder.address, balance)
        return bidder

    return _make_bidder
