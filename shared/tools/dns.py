"""A-record queries sent straight to an authoritative server."""

import dns.asyncquery
import dns.message
import dns.rdataclass
import dns.rdatatype

DNS_PORT = 53
QUERY_TIMEOUT = 5.0


async def query_a_record(
    record: str, server_ip: str, timeout: float = QUERY_TIMEOUT
) -> dns.message.Message:
    """Send one IN/A question for ``record`` to ``server_ip`` over UDP.

    The response is returned whatever its rcode. Transport and protocol
    problems raise ``dns.exception.DNSException`` or ``OSError``.
    """
    query = dns.message.make_query(record, dns.rdatatype.A, dns.rdataclass.IN)
    return await dns.asyncquery.udp(query, server_ip, timeout=timeout, port=DNS_PORT)


def first_a_address(response: dns.message.Message) -> str | None:
    """Return the address of the first answer record, if it is an A record."""
    if not response.answer:
        return None
    rrset = response.answer[0]
    if rrset.rdtype != dns.rdatatype.A or len(rrset) == 0:
        return None
    # rdatas keep wire order inside the rrset
    return next(iter(rrset)).address
