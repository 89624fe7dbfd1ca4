"""Public-suffix rule that treats every baidu.com subdomain as one site."""

from __future__ import annotations


def public_suffix(domain: str) -> str:
    """Return "com" for subdomains of baidu.com, otherwise the domain itself."""
    if domain.endswith(".baidu.com"):
        return "com"
    return domain