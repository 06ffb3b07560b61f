from __future__ import annotations

from ..rank.outcome import Failed, Found, LimitExhausted, NotFound, Outcome

PENDING_MESSAGE = "Searching Google, please wait..."
USAGE_MESSAGE = "Send a search query as plain text and I will report where the site ranks."


def format_outcome(outcome: Outcome) -> str:
    """Human-readable summary of an outcome for chat delivery."""
    if isinstance(outcome, Found):
        item = outcome.match.item
        return (
            f"Position: {outcome.match.rank}\n"
            f"URL: {item.url}\n"
            f"Title: {item.title}\n"
            f"Description: {item.snippet}"
        )
    if isinstance(outcome, NotFound):
        return "The site was not found in the search results for this query."
    if isinstance(outcome, LimitExhausted):
        return (
            f"Not found within the first {outcome.page_budget} results. "
            "Please try again later."
        )
    if isinstance(outcome, Failed):
        return f"Search failed, please try again later.\n{outcome.reason}"
    raise TypeError(f"Unknown outcome: {outcome!r}")


def format_for_operator(outcome: Outcome, user_label: str) -> str:
    text = format_outcome(outcome)
    if isinstance(outcome, Found):
        return text
    return f"{text}\nRequested by: {user_label}"


def format_pending(user_label: str | None = None) -> str:
    if user_label:
        return f"{PENDING_MESSAGE} {user_label}"
    return PENDING_MESSAGE
