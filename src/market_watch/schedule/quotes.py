from __future__ import annotations

from datetime import date, datetime

from market_watch.utils.dates import day_of_year, local_now

TRADING_QUOTES: tuple[str, ...] = (
    "Plan your trade, and trade your plan.",
    "Cut your losses and let your profits run.",
    "Markets can stay irrational longer than you can stay solvent.",
    "Risk comes from not knowing what you are doing.",
    "In trading, patience is a virtue and an edge.",
    "Don't predict the market; follow it.",
    "Successful trading is about 10% technique and 90% discipline.",
    "The trend is your friend until it ends.",
    "Protecting capital is the first rule.",
    "Every trade is just a game of probabilities.",
    "Stay calm inside, even in the most turbulent market.",
    "Always respect the market.",
    "If you can't control your emotions, you can't control your money.",
    "Compounding is the eighth wonder of the world, in trading too.",
)


def quote_of_day(today: datetime | date | None = None) -> str:
    index = day_of_year(today or local_now()) % len(TRADING_QUOTES)
    return TRADING_QUOTES[index]
