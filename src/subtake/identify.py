"""
Takeover identification for a single subdomain.

``identify`` combines the live page, the CNAME and the NXDOMAIN status of a
subdomain with the fingerprint catalog and returns a verdict string:

* ``''`` when nothing matched,
* the upper-cased service name when a fingerprint matched,
* ``DOMAIN_AVAILABLE:<cname>`` when the subdomain is NXDOMAIN and the CNAME's
  domain can be registered,
* ``DOMAIN_DEAD:<cname>`` in manual mode, for NXDOMAIN subdomains with a CNAME
  that no fingerprint claims.

Neither function raises on network trouble; lookups that fail count as empty.
"""

from dataclasses import dataclass

from .config import DEFAULT_TIMEOUT, logger
from .utils.availability import is_available
from .utils.dns_utils import is_nxdomain, resolve_cname
from .utils.http_utils import fetch

NOT_VULNERABLE = ''
DOMAIN_AVAILABLE = 'DOMAIN_AVAILABLE'
DOMAIN_DEAD = 'DOMAIN_DEAD'

# Anything this short is a root or junk answer, not a real target
MIN_CNAME_LENGTH = 4


@dataclass(frozen=True)
class Probe:
    subdomain: str
    cname: str
    nxdomain: bool
    body: bytes


def normalize_cname(cname):
    return cname if len(cname) >= MIN_CNAME_LENGTH else ''


def probe(subdomain, force_ssl=False, timeout=DEFAULT_TIMEOUT):
    body = fetch(subdomain, force_ssl, timeout)
    cname = normalize_cname(resolve_cname(subdomain, timeout))
    nx = is_nxdomain(subdomain, timeout)
    return Probe(subdomain=subdomain, cname=cname, nxdomain=nx, body=body)


def identify(subdomain, force_ssl, manual, timeout, fingerprints):
    result = probe(subdomain, force_ssl, timeout)
    cname = result.cname
    service = NOT_VULNERABLE
    available = None

    for entry in fingerprints:
        if result.nxdomain:
            if available is None:
                available = is_available(cname, timeout)
            if available:
                return f"{DOMAIN_AVAILABLE}:{cname}"

            if entry.nxdomain and entry.matches_cname(cname):
                return entry.service.upper()

            if manual and cname:
                return f"{DOMAIN_DEAD}:{cname}"

        # A body match does not end the scan; a later entry can still replace it
        if entry.matches_body(result.body):
            service = entry.service.upper()

    if service:
        logger.debug(f" [+] {subdomain} body matched {service} (CNAME: {cname or '-'})")
    return service


def verify_cname(subdomain, fingerprints, timeout=DEFAULT_TIMEOUT):
    """Triage: does the subdomain's CNAME point at any fingerprinted service?"""
    cname = resolve_cname(subdomain, timeout)
    if not cname:
        return False
    return any(entry.matches_cname(cname) for entry in fingerprints)
