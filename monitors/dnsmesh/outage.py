"""Open or bump the tracker issue for a failed run."""

import logging
from typing import Protocol

from shared.tools.github import issue_number

log = logging.getLogger("dnsmesh.outage")

ISSUE_TITLE = "Outage Report"


class IssueTracker(Protocol):
    """Tracker operations needed to reconcile an outage report."""

    async def list_open_issues(self) -> list[dict]:
        ...

    async def create_issue(self, title: str, body: str) -> dict:
        ...

    async def create_comment(self, number: int, body: str) -> dict:
        ...


def find_outage_issues(issues: list[dict]) -> list[dict]:
    """Open issues raised by this monitor, in tracker order."""
    return [issue for issue in issues if ISSUE_TITLE in (issue.get("title") or "")]


async def reconcile_outage_issue(tracker: IssueTracker, report: str) -> dict:
    """Comment on the existing outage issue, or open a new one.

    Tracker errors propagate. A failed comment is not retried as a new issue.
    """
    existing = find_outage_issues(await tracker.list_open_issues())

    # With several open outage issues the first one returned wins, not the
    # newest. There is no staleness cutoff either: an old open issue keeps
    # collecting comments until someone closes it.
    if existing:
        number = issue_number(existing[0])
        log.info("Appending report to open outage issue #%d", number)
        return await tracker.create_comment(number, report)

    log.info("No open outage issue, creating one")
    return await tracker.create_issue(ISSUE_TITLE, report)
