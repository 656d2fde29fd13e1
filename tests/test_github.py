import asyncio
import json

import httpx
import pytest

from shared.config import Config
from shared.tools.github import GitHubIssueTracker, issue_number

API = "https://api.github.com/repos/joshmcguigan/infra"


def _config(**overrides) -> Config:
    values = {"github_api_key": "secret", "github_repo": "joshmcguigan/infra",
              "github_api_url": "https://api.github.com"}
    values.update(overrides)
    return Config(**values)


def test_issue_number_prefers_number_over_id():
    assert issue_number({"id": 987654, "number": 4, "url": f"{API}/issues/4"}) == 4


def test_issue_number_parsed_from_url():
    assert issue_number({"id": 987654, "url": f"{API}/issues/31"}) == 31


def test_issue_number_unparseable_url():
    with pytest.raises(ValueError):
        issue_number({"id": 987654, "url": f"{API}/issues/"})


def test_tracker_requires_token():
    with pytest.raises(ValueError):
        GitHubIssueTracker(_config(github_api_key=""))


def test_list_open_issues_follows_pagination():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.params.get("page") == "2":
            return httpx.Response(200, json=[{"number": 3, "title": "Outage Report"}])
        return httpx.Response(
            200,
            json=[{"number": 1, "title": "a"}, {"number": 2, "title": "b"}],
            headers={"Link": f'<{API}/issues?state=open&per_page=100&page=2>; rel="next"'},
        )

    tracker = GitHubIssueTracker(_config(), transport=httpx.MockTransport(handler))
    issues = asyncio.run(tracker.list_open_issues())

    assert [i["number"] for i in issues] == [1, 2, 3]
    assert len(seen) == 2
    first = seen[0]
    assert first.url.path == "/repos/joshmcguigan/infra/issues"
    assert first.url.params["state"] == "open"
    assert first.url.params["per_page"] == "100"
    assert first.headers["Authorization"] == "token secret"
    assert first.headers["User-Agent"].startswith("dnsmesh-monitor/")


def test_create_issue_posts_title_and_body_only():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"number": 8, "title": "Outage Report"})

    tracker = GitHubIssueTracker(_config(), transport=httpx.MockTransport(handler))
    issue = asyncio.run(tracker.create_issue("Outage Report", "report"))

    assert issue["number"] == 8
    assert captured == {
        "method": "POST",
        "path": "/repos/joshmcguigan/infra/issues",
        "body": {"title": "Outage Report", "body": "report"},
    }


def test_create_comment_targets_issue_number():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": 555, "body": "report"})

    tracker = GitHubIssueTracker(_config(), transport=httpx.MockTransport(handler))
    asyncio.run(tracker.create_comment(12, "report"))

    assert captured == {
        "path": "/repos/joshmcguigan/infra/issues/12/comments",
        "body": {"body": "report"},
    }


def test_http_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Bad credentials"})

    tracker = GitHubIssueTracker(_config(), transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(tracker.list_open_issues())
