"""Environment-based configuration for the DNS mesh monitor."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_NAME_SERVERS = "ns1.rhiyo.com.=173.255.245.83,ns2.rhiyo.com.=212.71.246.209"


def parse_name_servers(raw: str) -> list[dict[str, str]]:
    """Parse ``name=address`` pairs separated by commas, keeping their order."""
    servers = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, address = entry.partition("=")
        if not sep or not name.strip() or not address.strip():
            raise ValueError(f"Invalid name server entry {entry!r}, expected name=address")
        servers.append({"name": name.strip(), "address": address.strip()})
    if not servers:
        raise ValueError("No name servers configured")
    return servers


@dataclass(frozen=True)
class Config:
    # GitHub issue tracker
    github_api_key: str = field(
        default_factory=lambda: os.getenv("GITHUB_API_KEY", "")
    )
    github_repo: str = field(
        default_factory=lambda: os.getenv("GITHUB_REPO", "joshmcguigan/infra")
    )
    github_api_url: str = field(
        default_factory=lambda: os.getenv("GITHUB_API_URL", "https://api.github.com")
    )

    # Name server inventory, in check order
    name_servers: list[dict[str, str]] = field(
        default_factory=lambda: parse_name_servers(
            os.getenv("NAME_SERVERS", DEFAULT_NAME_SERVERS)
        )
    )


def load_config() -> Config:
    load_dotenv()
    return Config()
