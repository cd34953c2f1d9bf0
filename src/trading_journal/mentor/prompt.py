"""Mentor prompt construction.

Only the most recent trades (in log order, not re-sorted by date) are
sent, to keep the request small.  Trade ids are stripped and empty
optional fields omitted before serialization.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from trading_journal.journal.record import Trade

DEFAULT_SAMPLE_SIZE = 10

MENTOR_INSTRUCTIONS = """\
You are a world-class trading mentor at 'Chart Decoders'.
Current Account Balance: ${balance}.

Here is a JSON list of the user's recent trades:
{trades}

Please provide a concise, professional analysis (max 3 paragraphs).
1. Identify any patterns in winning vs losing trades.
2. Comment on risk management based on the PnL sizes.
3. Give one actionable piece of advice to improve profitability.

Keep the tone encouraging but strict regarding discipline.
"""


def recent_trades(trades: Sequence[Trade], sample_size: int = DEFAULT_SAMPLE_SIZE) -> list[Trade]:
    """The last *sample_size* logged trades, oldest first."""
    if sample_size <= 0:
        return []
    return list(trades[-sample_size:])


def sanitize_trades(trades: Sequence[Trade]) -> list[dict]:
    return [t.to_record(include_id=False) for t in trades]


def build_mentor_prompt(
    trades: Sequence[Trade],
    balance: float,
    *,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> str:
    """Render the mentor instructions for *trades* and *balance*."""
    sample = sanitize_trades(recent_trades(trades, sample_size))
    return MENTOR_INSTRUCTIONS.format(
        balance=f"{balance:.2f}",
        trades=json.dumps(sample, ensure_ascii=False),
    )
