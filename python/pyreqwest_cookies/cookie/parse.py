"""Turning Set-Cookie header values into stored cookies (RFC 6265 section 5.3 storage model)."""

from datetime import UTC, datetime

from pyreqwest.cookie import Cookie

from pyreqwest_cookies.cookie.matching import default_path, domain_match, is_public_suffix
from pyreqwest_cookies.cookie.model import StoredCookie
from pyreqwest_cookies.exceptions import CookieRejected
from pyreqwest_cookies.url import RequestTarget

# Latest expiry that survives a timestamp round trip through the persistence format.
MAX_EXPIRY = datetime(9999, 12, 31, tzinfo=UTC)


def parse_set_cookie(header: str, target: RequestTarget, now: datetime) -> StoredCookie:
    """Parse a Set-Cookie value received in response to a request for target.

    The grammar is handled by pyreqwest's Cookie parser; this resolves the cookie's scope and expiry the way a user
    agent stores it. The returned cookie's expiry may already be in the past, which the jar treats as a deletion.

    Args:
        header: Raw Set-Cookie header value
        target: Request the response belongs to
        now: Current aware UTC time, base for Max-Age

    Raises:
        CookieRejected: The value has no valid name, or its Domain attribute is a foreign domain or a public suffix.
    """
    try:
        parsed = Cookie.parse(header)
    except Exception as e:  # noqa: BLE001
        raise CookieRejected(f"unparsable: {e}", header) from e

    name = parsed.name.strip()
    if not name:
        raise CookieRejected("empty name", header)

    domain, host_only = _resolve_domain(parsed.domain, target, header)
    path = parsed.path if parsed.path and parsed.path.startswith("/") else default_path(target.path)

    return StoredCookie(
        name=name,
        value=parsed.value.strip(),
        domain=domain,
        path=path,
        host_only=host_only,
        secure=parsed.secure,
        http_only=parsed.http_only,
        same_site=parsed.same_site,
        expires=_resolve_expiry(parsed, now),
        created=now,
    )


def _resolve_domain(attribute: str | None, target: RequestTarget, header: str) -> tuple[str, bool]:
    domain = (attribute or "").strip().lstrip(".").lower().rstrip(".")
    if not domain:
        return target.host, True

    if is_public_suffix(domain):
        if domain == target.host:
            return target.host, True
        raise CookieRejected(f"domain {domain!r} is a public suffix", header)

    if not domain_match(target.host, domain):
        raise CookieRejected(f"domain {domain!r} does not match host {target.host!r}", header)

    return domain, False


def _resolve_expiry(parsed: Cookie, now: datetime) -> datetime | None:
    try:
        max_age = parsed.max_age
    except OverflowError:
        return MAX_EXPIRY
    if max_age is not None:
        if max_age.total_seconds() <= 0:
            return datetime.min.replace(tzinfo=UTC)
        try:
            return min(now + max_age, MAX_EXPIRY)
        except OverflowError:
            return MAX_EXPIRY

    try:
        expires = parsed.expires_datetime
    except (OverflowError, ValueError):
        return MAX_EXPIRY
    if expires is None:
        return None
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=UTC)
    return min(expires.astimezone(UTC), MAX_EXPIRY)
