"""Invariant checks for a deployed auction, run from tests between calls."""

import logging

import boa

from .errors import InvariantViolation

logger = logging.getLogger(__name__)


class InvariantChecker:
    """Watch one auction across calls.

    The checker remembers the latest deadline it has seen, so a deadline
    that moves backwards between two checks is reported.
    """

    def __init__(self, auction):
        self.auction = auction
        self.max_deadline = 0

    def check(self):
        auction = self.auction
        highest, second = auction.highest_bid(), auction.second_bid()
        deadline = auction.deadline()
        balance = boa.env.get_balance(auction.address)
        pending = auction.total_pending()

        if highest[1] < second[1]:
            raise InvariantViolation(f"highest bid {highest[1]} below second bid {second[1]}")

        if deadline < self.max_deadline:
            raise InvariantViolation(f"deadline moved back from {self.max_deadline} to {deadline}")
        self.max_deadline = deadline

        # Until settlement the prize, the escrowed second bid and credited refunds stay covered
        owed = pending if auction.settled() else auction.prize() + second[1] + pending
        if auction.started() and balance < owed:
            raise InvariantViolation(f"balance {balance} cannot cover {owed}")

        logger.debug("%s ok: deadline %s, balance %s", auction.address, deadline, balance)
