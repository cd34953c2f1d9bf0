"""AI mentor — qualitative feedback on recent trades from a language model.

Public API
----------
build_mentor_prompt   Render the request text for a trade sample
MentorClient          httpx client for the model service
MentorSession         Request/clear state with stale-reply protection
MentorResult          Outcome + text shown to the user
"""

from trading_journal.mentor.client import IMentorClient, MentorClient
from trading_journal.mentor.prompt import build_mentor_prompt
from trading_journal.mentor.session import MentorResult, MentorSession

__all__ = [
    "IMentorClient",
    "MentorClient",
    "MentorResult",
    "MentorSession",
    "build_mentor_prompt",
]
