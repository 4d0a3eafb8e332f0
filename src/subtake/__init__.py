"""Subdomain takeover detection: CNAME triage plus fingerprint identification."""

__version__ = "0.1.0"
