"""Resource balance model used for treasuries and AI wallets."""

from dataclasses import dataclass


@dataclass
class Resources:
    """A credits/minerals balance.

    The per-player treasury is the ledger of record. The AI keeps three more
    of these as private wallets. Balances may go negative under upkeep.
    """

    credits: float = 0
    minerals: float = 0

    def copy(self) -> "Resources":
        """Return an independent copy of this balance."""
        return Resources(credits=self.credits, minerals=self.minerals)

    def to_dict(self) -> dict:
        return {"credits": self.credits, "minerals": self.minerals}
