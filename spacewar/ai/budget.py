"""Budget allocation across the AI's three private wallets.

Income is split between an economy wallet (mines), a tech wallet
(infrastructure, shipyards, defense) and a war wallet (ships). The split
depends on how many mines the AI owns: a young empire pours money into
mines and a few ships, a mature one shifts almost everything to war.

Spending always debits the wallet and the player's treasury by the same
amount, so the three wallets together always equal the treasury.
"""

from dataclasses import dataclass, field
from typing import Union

from ..models.kinds import Cost, ShipKind, StructureKind
from ..models.resources import Resources

# (mine count upper bound, (eco, tech, war))
SHARE_BANDS = (
    (5, (0.40, 0.10, 0.50)),
    (15, (0.40, 0.10, 0.50)),
    (30, (0.50, 0.20, 0.30)),
    (45, (0.20, 0.45, 0.35)),
    (60, (0.10, 0.35, 0.55)),
)
LATE_SHARES = (0.05, 0.25, 0.70)


@dataclass
class Wallets:
    eco: Resources = field(default_factory=Resources)
    tech: Resources = field(default_factory=Resources)
    war: Resources = field(default_factory=Resources)

    def deposit(self, other: "Wallets") -> None:
        for name in ("eco", "tech", "war"):
            mine, theirs = getattr(self, name), getattr(other, name)
            mine.credits += theirs.credits
            mine.minerals += theirs.minerals

    def total(self) -> Resources:
        return Resources(
            credits=self.eco.credits + self.tech.credits + self.war.credits,
            minerals=self.eco.minerals + self.tech.minerals + self.war.minerals,
        )

    def to_dict(self) -> dict:
        return {"eco": self.eco.to_dict(), "tech": self.tech.to_dict(), "war": self.war.to_dict()}


def share_table(total_mines: int) -> tuple[float, float, float]:
    """Return the (eco, tech, war) split for an empire with ``total_mines`` mines."""
    for upper, shares in SHARE_BANDS:
        if total_mines < upper:
            return shares
    return LATE_SHARES


def allocate(income: Resources, total_mines: int) -> Wallets:
    """Split income between the three wallets.

    Credits and minerals are split with the same shares. Negative income
    (upkeep exceeding earnings) is split the same way.

    Args:
        income: Resources to distribute
        total_mines: Built plus queued mines the AI owns

    Returns:
        Wallets whose sums equal ``income``
    """
    eco, tech, _ = share_table(total_mines)
    wallets = Wallets(
        eco=Resources(credits=income.credits * eco, minerals=income.minerals * eco),
        tech=Resources(credits=income.credits * tech, minerals=income.minerals * tech),
    )
    # War takes the remainder so the split is exact
    wallets.war = Resources(
        credits=income.credits - wallets.eco.credits - wallets.tech.credits,
        minerals=income.minerals - wallets.eco.minerals - wallets.tech.minerals,
    )
    return wallets


def afford(cost: Cost, wallet: Resources) -> bool:
    return wallet.credits >= cost.credits and wallet.minerals >= cost.minerals


def pay(cost: Cost, wallet: Resources, treasury: Resources) -> None:
    """Debit ``cost`` from both the wallet and the treasury."""
    wallet.credits -= cost.credits
    wallet.minerals -= cost.minerals
    treasury.credits -= cost.credits
    treasury.minerals -= cost.minerals


def wallet_for(wallets: Wallets, kind: Union[StructureKind, ShipKind]) -> Resources:
    """Route a build kind to the wallet that pays for it."""
    if isinstance(kind, ShipKind):
        return wallets.war
    if kind is StructureKind.MINE:
        return wallets.eco
    return wallets.tech
