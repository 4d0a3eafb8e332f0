"""Fingerprint catalog: the services a dangling CNAME can point at.

The catalog file is a JSON array of records shaped like::

    {"service": "GitHub", "cname": ["github.io"],
     "fingerprint": ["There isn't a GitHub Pages site here."], "nxdomain": false}

Loading is strict. A catalog that silently came back empty would report every
subdomain as not vulnerable, so anything malformed raises FingerprintError.
"""

import json
from dataclasses import dataclass
from typing import Tuple

from .config import logger

REQUIRED_FIELDS = {'service': str, 'cname': list, 'fingerprint': list, 'nxdomain': bool}


class FingerprintError(ValueError):
    """Raised when the fingerprint catalog is missing or malformed."""


@dataclass(frozen=True)
class Fingerprint:
    service: str
    cname: Tuple[str, ...]
    fingerprint: Tuple[str, ...]
    nxdomain: bool = False

    @classmethod
    def from_dict(cls, record, index=0):
        if not isinstance(record, dict):
            raise FingerprintError(f"Entry {index} is not an object: {record!r}")

        for field, expected in REQUIRED_FIELDS.items():
            if field not in record:
                raise FingerprintError(f"Entry {index} is missing '{field}'")
            if not isinstance(record[field], expected):
                raise FingerprintError(f"Entry {index} field '{field}' must be {expected.__name__}")

        service = record['service'].strip()
        if not service:
            raise FingerprintError(f"Entry {index} has an empty service name")

        for field in ('cname', 'fingerprint'):
            for pattern in record[field]:
                # "" is a substring of everything
                if not isinstance(pattern, str) or not pattern:
                    raise FingerprintError(f"Entry {index} ({service}) has an invalid {field} pattern: {pattern!r}")

        return cls(
            service=service,
            cname=tuple(record['cname']),
            fingerprint=tuple(record['fingerprint']),
            nxdomain=record['nxdomain'],
        )

    def matches_cname(self, cname):
        return any(pattern in cname for pattern in self.cname)

    def matches_body(self, body):
        return any(pattern.encode() in body for pattern in self.fingerprint)


def parse_fingerprints(records):
    if not isinstance(records, list):
        raise FingerprintError("Fingerprint catalog must be a JSON array")
    if not records:
        raise FingerprintError("Fingerprint catalog is empty")
    return tuple(Fingerprint.from_dict(record, index) for index, record in enumerate(records))


def load_fingerprints(path):
    """Read and validate the catalog at ``path``; returns an immutable tuple in file order."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)
    except OSError as e:
        raise FingerprintError(f"Could not read fingerprint catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FingerprintError(f"Fingerprint catalog {path} is not valid JSON: {e}") from e

    fingerprints = parse_fingerprints(records)
    logger.debug(f"Loaded {len(fingerprints)} fingerprints from {path}")
    return fingerprints
