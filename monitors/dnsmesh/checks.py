"""Cross-server A record checks for the authoritative name servers."""

import enum
import ipaddress
import logging
from dataclasses import dataclass

import dns.exception
import dns.name

from shared.tools.dns import first_a_address, query_a_record

log = logging.getLogger("dnsmesh.checks")

DEFAULT_RETRIES = 2


@dataclass(frozen=True)
class NameServer:
    address: ipaddress.IPv4Address
    name: str  # absolute, with trailing dot


@dataclass(frozen=True)
class Check:
    """Ask ``name_server`` for the A record of another (or the same) server."""

    name_server: NameServer
    record_to_request: str
    expected_ip: ipaddress.IPv4Address


class CheckOutcome(enum.Enum):
    PASS = "PASS"
    FAIL = "FAIL"


@dataclass(frozen=True)
class CheckResult:
    check: Check
    outcome: CheckOutcome
    error: str | None = None  # log detail only, never reported


def load_name_servers(config) -> list[NameServer]:
    """Turn the configured inventory into NameServer values, keeping order."""
    servers = []
    for entry in config.name_servers:
        servers.append(NameServer(
            address=ipaddress.IPv4Address(entry["address"]),
            name=dns.name.from_text(entry["name"]).to_text(),
        ))
    if not servers:
        raise ValueError("Name server inventory is empty")
    return servers


def build_checks(name_servers: list[NameServer]) -> list[Check]:
    """Every server is asked for every server's record, itself included."""
    checks = []
    for name_server in name_servers:
        for target in name_servers:
            checks.append(Check(
                name_server=name_server,
                record_to_request=target.name,
                expected_ip=target.address,
            ))
    return checks


async def perform_check(
    check: Check, retries: int = DEFAULT_RETRIES, query=query_a_record
) -> CheckResult:
    """Resolve one check, retrying failed queries up to ``retries`` times.

    Only transport failures are retried. An empty answer or a wrong address
    fails straight away.
    """
    server_ip = str(check.name_server.address)
    attempts = 0
    while True:
        attempts += 1
        try:
            response = await query(check.record_to_request, server_ip)
            break
        except (dns.exception.DNSException, OSError) as e:
            if attempts > retries:
                return CheckResult(
                    check, CheckOutcome.FAIL,
                    error=f"query failed after {attempts} attempt(s): {e!r}",
                )
            log.debug(
                "Query %s @%s failed (attempt %d), retrying: %r",
                check.record_to_request, server_ip, attempts, e,
            )

    address = first_a_address(response)
    if address is None:
        return CheckResult(check, CheckOutcome.FAIL, error="no A record in answer")
    if ipaddress.IPv4Address(address) != check.expected_ip:
        return CheckResult(
            check, CheckOutcome.FAIL,
            error=f"resolved to {address}, expected {check.expected_ip}",
        )
    return CheckResult(check, CheckOutcome.PASS)


async def run_all_checks(checks: list[Check], query=query_a_record) -> list[CheckResult]:
    """Run every check in order; a failure never stops the remaining checks."""
    results = []
    for check in checks:
        result = await perform_check(check, query=query)
        if result.outcome is CheckOutcome.FAIL:
            log.warning(
                "Server %s resolving %s failed: %s",
                check.name_server.name, check.record_to_request, result.error,
            )
        results.append(result)
    return results


def any_failed(results: list[CheckResult]) -> bool:
    return any(r.outcome is CheckOutcome.FAIL for r in results)
