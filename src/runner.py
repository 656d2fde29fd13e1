"""Main entry point: one run of the DNS mesh checks, invoked from cron."""

import asyncio
import logging
import sys

from monitors.dnsmesh.checks import any_failed, build_checks, load_name_servers, run_all_checks
from monitors.dnsmesh.outage import reconcile_outage_issue
from monitors.dnsmesh.report import format_check_results
from shared.config import load_config
from shared.tools.dns import query_a_record
from shared.tools.github import GitHubIssueTracker

log = logging.getLogger("dnsmesh")


async def run_once(config, tracker=None, query=query_a_record) -> bool:
    """Check the whole mesh and report an outage if any check failed.

    Returns True when an outage was detected.
    """
    name_servers = load_name_servers(config)
    checks = build_checks(name_servers)
    log.info("Running %d check(s) across %d name server(s)", len(checks), len(name_servers))

    results = await run_all_checks(checks, query=query)
    report = format_check_results(results)

    if not any_failed(results):
        print("All checks completed. All services OK.")
        return False

    print("Outage detected - creating GitHub issue")
    log.warning("Outage report:\n%s", report)
    if tracker is None:
        tracker = GitHubIssueTracker(config)
    await reconcile_outage_issue(tracker, report)
    return True


async def main():
    # One run per invocation; cron owns the schedule. Tracker errors propagate.
    await run_once(load_config())


def cli():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception:
        log.exception("Run aborted")
        sys.exit(1)


if __name__ == "__main__":
    cli()
