from .config import logger, load_settings, DEFAULT_THREADS, DEFAULT_TIMEOUT
from .fingerprints import load_fingerprints
from .identify import identify, verify_cname
from .utils.output_utils import report

from concurrent.futures import ThreadPoolExecutor, as_completed
import logging
import os
import sys
import threading


class TargetListError(ValueError):
    """Raised when no subdomains could be loaded to scan."""


class TakeoverScanner:
    def __init__(self, domain=None, wordlist_path=None, threads=DEFAULT_THREADS, timeout=DEFAULT_TIMEOUT, output_file=None, force_ssl=False, check_all=False, manual=False, verbose=False, fingerprints_path=None, fingerprints=None):
        self.domain = domain
        self.wordlist_path = wordlist_path
        self.threads = max(1, threads)
        self.timeout = timeout
        self.output_file = output_file
        self.force_ssl = force_ssl
        self.check_all = check_all
        self.manual = manual
        self.verbose = verbose

        self.fingerprints_path = fingerprints_path or load_settings()['fingerprints']
        # Loaded once and only read afterwards; safe to share between workers
        self.fingerprints = fingerprints if fingerprints is not None else load_fingerprints(self.fingerprints_path)

        self.vulnerable = {}
        self.checked_count = 0
        self.data_lock = threading.Lock()

        if self.verbose:
            logger.setLevel(logging.DEBUG)

    def load_targets(self):
        """Single -d target, or one subdomain per line from the wordlist (blank lines and duplicates skipped)."""
        if self.domain:
            return [self.domain.strip().lower()]

        if not self.wordlist_path or not os.path.exists(self.wordlist_path):
            raise TargetListError(f"Subdomain list not found: {self.wordlist_path}")

        targets = []
        seen = set()
        with open(self.wordlist_path, 'r') as f:
            for line in f:
                subdomain = line.strip().lower().rstrip('.')
                if subdomain and subdomain not in seen:
                    seen.add(subdomain)
                    targets.append(subdomain)

        if not targets:
            raise TargetListError(f"Subdomain list is empty: {self.wordlist_path}")
        logger.info(f"Loaded {len(targets)} subdomains from {self.wordlist_path}.")
        return targets

    def check(self, subdomain):
        if not self.check_all and not verify_cname(subdomain, self.fingerprints, self.timeout):
            logger.debug(f" [-] {subdomain}: CNAME matches no fingerprinted service, skipping.")
            service = ''
        else:
            service = identify(subdomain, self.force_ssl, self.manual, self.timeout, self.fingerprints)

        report(service, subdomain, self.output_file, self.verbose)

        with self.data_lock:
            self.checked_count += 1
            if service:
                self.vulnerable[subdomain] = service
        return service

    def run(self):
        targets = self.load_targets()
        logger.info(f"[*] Checking {len(targets)} subdomains against {len(self.fingerprints)} fingerprints with {self.threads} threads...")

        with ThreadPoolExecutor(max_workers=self.threads) as executor:
            futures = {executor.submit(self.check, name): name for name in targets}
            for future in as_completed(futures):
                try:
                    _ = future.result()
                except Exception as e:
                    logger.error(f" [!] Error while checking {futures[future]}: {e}", exc_info=self.verbose)

        self.final_reporting()
        return self.vulnerable

    def final_reporting(self):
        logger.info("--- Subdomain Takeover Scan Complete ---")
        logger.info(f"  Subdomains checked: {self.checked_count}")
        logger.info(f"  Vulnerable subdomains: {len(self.vulnerable)}")
        for subdomain in sorted(self.vulnerable):
            logger.info(f"     {subdomain}: {self.vulnerable[subdomain]}")
        if self.output_file and self.vulnerable:
            logger.info(f"Results saved to: {self.output_file}")
        sys.stdout.flush()
