from ..config import USER_AGENTS, MAX_BODY_BYTES
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
import random
import time
import requests
from ..config import logger

CHUNK_SIZE = 8192
MAX_REDIRECTS = 10


class DeadlineExceeded(Exception):
    pass


def get_session():
    session = requests.Session()
    session.headers.update({'User-Agent': random.choice(USER_AGENTS)})
    session.verify = False # Takeover pages are often served with mismatched certs
    session.max_redirects = MAX_REDIRECTS
    return session


def site_url(host, use_ssl):
    return f"{'https' if use_ssl else 'http'}://{host}"


def _remaining(deadline):
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise DeadlineExceeded()
    return remaining


def _set_read_timeout(response, seconds):
    connection = getattr(response.raw, 'connection', None)
    sock = getattr(connection, 'sock', None)
    if sock is not None:
        sock.settimeout(seconds)


def _read_body(session, url, deadline):
    def check_deadline(response, *args, **kwargs):
        # Runs for every hop of a redirect chain
        _remaining(deadline)

    response = session.get(url, timeout=_remaining(deadline), allow_redirects=True, stream=True,
                           hooks={'response': check_deadline})
    body = bytearray()
    try:
        while len(body) < MAX_BODY_BYTES:
            _set_read_timeout(response, _remaining(deadline))
            chunk = response.raw.read(CHUNK_SIZE, decode_content=True)
            if not chunk:
                break
            body.extend(chunk)
    finally:
        response.close()
    return response.status_code, bytes(body[:MAX_BODY_BYTES])


def fetch(host, use_ssl=False, timeout=10, session=None):
    """
    GET the host's root page and return the raw body.

    ``timeout`` is a wall-clock deadline for the whole exchange, redirects,
    connect and header wait included. Any failure, including running out of
    time, returns b''. Error statuses still return their body.
    """
    url = site_url(host, use_ssl)
    deadline = time.monotonic() + timeout
    session = session or get_session()

    # The worker is abandoned on timeout; its own socket timeouts and the deadline hook end it
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='subtake-fetch')
    future = executor.submit(_read_body, session, url, deadline)
    try:
        status_code, body = future.result(timeout=timeout)
    except (FutureTimeout, DeadlineExceeded):
        logger.debug(f" [!] Fetch of {url} exceeded the {timeout}s deadline")
        return b''
    except requests.exceptions.RequestException as e:
        logger.debug(f" [!] Fetch failed for {url}: {type(e).__name__} - {e}")
        return b''
    except Exception as e:
        logger.debug(f" [!] Unknown error fetching {url}: {type(e).__name__} - {e}")
        return b''
    finally:
        executor.shutdown(wait=False)

    logger.debug(f" [+] Fetched {url} (Status: {status_code}, {len(body)} bytes)")
    return body
