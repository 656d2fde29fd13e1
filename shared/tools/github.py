"""GitHub issues REST client used for outage tracking."""

import logging

import httpx

log = logging.getLogger("dnsmesh.github")

USER_AGENT = "dnsmesh-monitor/0.1.0"


def issue_number(issue: dict) -> int:
    """Return the issue number (not the issue id) of an issue payload.

    Falls back to the last path segment of the issue's API url.
    """
    number = issue.get("number")
    if number is not None:
        return int(number)
    url = issue.get("url") or ""
    try:
        return int(url.rstrip("/").rsplit("/", 1)[-1])
    except ValueError:
        raise ValueError(f"Cannot determine issue number from url {url!r}") from None


class GitHubIssueTracker:
    """Issue operations against a single ``owner/name`` repository."""

    def __init__(self, config, transport: httpx.AsyncBaseTransport | None = None, timeout: float = 15.0):
        if not config.github_api_key:
            raise ValueError("GITHUB_API_KEY is not set")
        self.config = config
        self.transport = transport
        self.timeout = timeout
        self.repo_url = f"{config.github_api_url.rstrip('/')}/repos/{config.github_repo}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={
                "Authorization": f"token {self.config.github_api_key}",
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
            },
        )

    async def list_open_issues(self, per_page: int = 100) -> list[dict]:
        """Return every open issue, following pagination, in API order."""
        issues = []
        async with self._client() as client:
            url = f"{self.repo_url}/issues"
            params = {"state": "open", "per_page": str(per_page)}
            while url:
                resp = await client.get(url, params=params)
                resp.raise_for_status()
                issues.extend(resp.json())
                # the next link already carries the query string
                url = resp.links.get("next", {}).get("url")
                params = None
        log.info("Fetched %d open issue(s) from %s", len(issues), self.config.github_repo)
        return issues

    async def create_issue(self, title: str, body: str) -> dict:
        async with self._client() as client:
            resp = await client.post(
                f"{self.repo_url}/issues",
                json={"title": title, "body": body},
            )
            resp.raise_for_status()
            issue = resp.json()
        log.info("Created issue #%s: %s", issue.get("number"), title)
        return issue

    async def create_comment(self, number: int, body: str) -> dict:
        async with self._client() as client:
            resp = await client.post(
                f"{self.repo_url}/issues/{number}/comments",
                json={"body": body},
            )
            resp.raise_for_status()
            comment = resp.json()
        log.info("Commented on issue #%d", number)
        return comment
