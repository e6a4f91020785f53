"""RFC 6265 domain and path matching (section 5.1.3 and 5.1.4)."""

import ipaddress
from functools import lru_cache

import tldextract

# Bundled Public Suffix List snapshot only, so matching never reaches the network.
_public_suffixes = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None, include_psl_private_domains=True)


def is_ip_address(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def domain_match(host: str, domain: str) -> bool:
    """Whether a canonical host domain-matches a cookie domain."""
    if host == domain:
        return True
    return host.endswith("." + domain) and not is_ip_address(host)


@lru_cache(maxsize=1024)
def is_public_suffix(domain: str) -> bool:
    """Whether the domain is itself a public suffix such as 'com' or 'co.uk'.

    A TLD missing from the list is a public suffix by the list's implicit '*' rule, so 'internal' and 'localhost'
    are suffixes while 'corp.internal' is not.
    """
    if not domain or is_ip_address(domain):
        return False
    extracted = _public_suffixes(domain)
    if not extracted.suffix:
        return "." not in domain
    return not extracted.domain and extracted.suffix == domain


def default_path(request_path: str) -> str:
    """Default cookie path for a Set-Cookie without a usable Path attribute."""
    if not request_path.startswith("/"):
        return "/"
    last_slash = request_path.rfind("/")
    if last_slash == 0:
        return "/"
    return request_path[:last_slash]


def path_match(request_path: str, cookie_path: str) -> bool:
    if request_path == cookie_path:
        return True
    if not request_path.startswith(cookie_path):
        return False
    return cookie_path.endswith("/") or request_path[len(cookie_path)] == "/"
