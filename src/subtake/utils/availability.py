"""
Registration availability for the apex domain behind a dangling CNAME.

A domain is considered available when it has no delegation in DNS and WHOIS
has no record of it. Every failure answers False: claiming a domain is
purchasable when it is not would be a false positive.
"""

from ..config import logger
from .dns_utils import build_resolver
import socket
import backoff
import dns.exception
import dns.resolver
import tldextract
import whois
from whois.exceptions import WhoisDomainNotFoundError

# Offline public suffix snapshot; never fetch the list at scan time
_extract = tldextract.TLDExtract(suffix_list_urls=())


def apex_domain(hostname):
    """Registrable domain for ``hostname`` ('' when it has none, e.g. a bare suffix)."""
    ext = _extract(hostname.rstrip('.').lower())
    if not ext.domain or not ext.suffix:
        return ''
    return f"{ext.domain}.{ext.suffix}"


def has_delegation(apex, timeout=10, resolver=None):
    """
    True if the apex has NS records, False if DNS says it does not exist or
    nobody serves it. Returns None when DNS could not give an answer either way.
    """
    try:
        resolver = resolver or build_resolver(timeout)
        resolver.resolve(apex, 'NS')
        return True
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers):
        return False
    except dns.exception.DNSException as e:
        logger.debug(f" [!] NS lookup for {apex} failed: {type(e).__name__} - {e}")
        return None


@backoff.on_exception(backoff.expo, (socket.timeout, ConnectionError), max_tries=3, jitter=backoff.full_jitter, logger=logger)
def whois_registered(apex, timeout=10):
    try:
        record = whois.whois(apex, ignore_socket_errors=False, timeout=timeout)
    except WhoisDomainNotFoundError:
        # "No match for ..." style replies; other whois errors mean we do not know
        return False
    return bool(record and record.get('domain_name'))


def is_available(domain, timeout=10, resolver=None):
    if not domain:
        return False

    apex = apex_domain(domain)
    if not apex:
        logger.debug(f" [.] {domain} has no registrable apex")
        return False

    delegated = has_delegation(apex, timeout, resolver)
    if delegated is None or delegated:
        return False

    try:
        registered = whois_registered(apex, timeout)
    except Exception as e:
        logger.debug(f" [!] WHOIS lookup for {apex} failed: {type(e).__name__} - {e}")
        return False

    if not registered:
        logger.info(f" [+] {apex} appears to be unregistered")
    return not registered
