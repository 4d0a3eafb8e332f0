from ..config import logger, load_settings
import dns.exception
import dns.resolver


def build_resolver(timeout, nameservers=None):
    nameservers = nameservers if nameservers is not None else load_settings()['resolvers']
    # Skip /etc/resolv.conf when nameservers are given explicitly
    resolver = dns.resolver.Resolver(configure=not nameservers)
    resolver.timeout = timeout / 2
    resolver.lifetime = timeout
    if nameservers:
        resolver.nameservers = list(nameservers)
    return resolver


def resolve_cname(host, timeout=10, resolver=None):
    """Return the CNAME target of ``host`` without its trailing dot, or '' if there is none."""
    cname = ''
    try:
        resolver = resolver or build_resolver(timeout)
        answers = resolver.resolve(host, 'CNAME')
        for answer in answers:
            cname = str(answer.target).rstrip('.')
    except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
        pass
    except dns.exception.DNSException as e:
        logger.debug(f" [!] CNAME lookup failed for {host}: {type(e).__name__} - {e}")
    return cname


def is_nxdomain(host, timeout=10, resolver=None):
    """True only when the resolver positively answers NXDOMAIN for ``host``."""
    try:
        resolver = resolver or build_resolver(timeout)
        resolver.resolve(host, 'A')
    except dns.resolver.NXDOMAIN:
        return True
    except dns.exception.DNSException as e:
        logger.debug(f" [.] A lookup for {host} gave no NXDOMAIN verdict: {type(e).__name__}")
    return False
