import io
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from subtake.config import MAX_BODY_BYTES, USER_AGENTS
from subtake.utils import http_utils
from subtake.utils.http_utils import fetch, get_session, site_url


class FakeRaw(io.BytesIO):
    def read(self, size=-1, decode_content=True):
        return super().read(size)


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.raw = FakeRaw(body)
        self.status_code = status_code
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_site_url():
    assert site_url("a.example.com", False) == "http://a.example.com"
    assert site_url("a.example.com", True) == "https://a.example.com"


def test_fetch_returns_body_of_error_pages():
    response = FakeResponse(b"There isn't a GitHub Pages site here.", status_code=404)
    session = FakeSession(response)
    assert fetch("docs.example.com", True, 5, session=session) == b"There isn't a GitHub Pages site here."
    url, kwargs = session.calls[0]
    assert url == "https://docs.example.com"
    assert kwargs['stream'] is True
    assert 0 < kwargs['timeout'] <= 5
    assert response.closed


def test_fetch_caps_body_size():
    session = FakeSession(FakeResponse(b"x" * (MAX_BODY_BYTES + 5000)))
    assert len(fetch("big.example.com", False, 5, session=session)) == MAX_BODY_BYTES


def test_fetch_request_errors_collapse_to_empty():
    for error in (requests.exceptions.ConnectionError("refused"), requests.exceptions.Timeout("slow")):
        assert fetch("down.example.com", False, 5, session=FakeSession(error=error)) == b''


def test_fetch_unexpected_errors_collapse_to_empty():
    assert fetch("odd.example.com", False, 5, session=FakeSession(error=ValueError("bad"))) == b''


def test_get_session_sets_user_agent_and_skips_verification():
    session = get_session()
    assert session.headers['User-Agent'] in USER_AGENTS
    assert session.verify is False
    assert session.max_redirects == http_utils.MAX_REDIRECTS


class SlowHandler(BaseHTTPRequestHandler):
    delay = 0.0
    redirect = False

    def do_GET(self):
        time.sleep(self.delay)
        if self.redirect:
            self.send_response(302)
            self.send_header('Location', self.path)
            self.send_header('Content-Length', '0')
            self.end_headers()
            return
        body = b"There isn't a GitHub Pages site here."
        self.send_response(404)
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_server():
    servers = []

    def start(delay=0.0, redirect=False):
        handler = type('Handler', (SlowHandler,), {'delay': delay, 'redirect': redirect})
        server = ThreadingHTTPServer(('127.0.0.1', 0), handler)
        server.daemon_threads = True
        server.block_on_close = False
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"127.0.0.1:{server.server_address[1]}"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


def direct_session():
    session = get_session()
    session.trust_env = False
    return session


def test_fetch_reads_local_page(local_server):
    host = local_server()
    assert fetch(host, False, 5, session=direct_session()) == b"There isn't a GitHub Pages site here."


def test_fetch_bounds_slow_headers(local_server):
    host = local_server(delay=3)
    started = time.monotonic()
    assert fetch(host, False, 1, session=direct_session()) == b''
    assert time.monotonic() - started < 1.5


def test_fetch_bounds_slow_redirect_loop(local_server):
    host = local_server(delay=0.4, redirect=True)
    started = time.monotonic()
    assert fetch(host, False, 1, session=direct_session()) == b''
    assert time.monotonic() - started < 1.5
