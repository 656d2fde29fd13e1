"""Plain-text outage report, posted verbatim to the issue tracker."""

from monitors.dnsmesh.checks import CheckResult

REPORT_HEADER = "Automated outage report"


def format_check_results(results: list[CheckResult]) -> str:
    lines = [REPORT_HEADER, ""]
    for result in results:
        lines.append(
            f"Server {result.check.name_server.name} "
            f"resolving {result.check.record_to_request} {result.outcome.value}"
        )
    return "\n".join(lines) + "\n"
