import os
import sys
import logging
from requests.packages.urllib3.exceptions import InsecureRequestWarning
import requests

# Suppress SSL warnings globally
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

# User Agents for rotation
USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15',
    'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0',
]

DEFAULT_TIMEOUT = 10
DEFAULT_THREADS = 10

# Fingerprint pages are small; anything past this is not worth reading
MAX_BODY_BYTES = 1024 * 1024

DEFAULT_FINGERPRINTS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data', 'fingerprints.json')

# Logger setup (can be customized)
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger('subtake')

# Overrides (loaded from env vars)
def load_settings():
    resolvers = os.getenv('SUBTAKE_RESOLVERS', '')
    return {
        'fingerprints': os.getenv('SUBTAKE_FINGERPRINTS', '') or DEFAULT_FINGERPRINTS_PATH,
        'resolvers': [r.strip() for r in resolvers.split(',') if r.strip()],
    }
