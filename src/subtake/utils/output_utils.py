import json
import os
import sys
import threading
from ..config import logger

_write_lock = threading.Lock()


def is_json_output(path):
    return bool(path) and path.lower().endswith('.json')


def format_result(service, subdomain):
    if service:
        return f"[VULNERABLE:{service}] {subdomain}\n"
    return f"[NOT_VULNERABLE] {subdomain}\n"


def build_record(service, subdomain):
    record = {'subdomain': subdomain.lower(), 'vulnerable': bool(service), 'service': service}
    # DOMAIN_AVAILABLE:<cname> / DOMAIN_DEAD:<cname>
    if service.startswith('DOMAIN_') and ':' in service:
        tag, domain = service.split(':', 1)
        record['service'] = tag
        record['domain'] = domain
    return record


def write_text(result, path):
    try:
        with _write_lock:
            with open(path, 'a') as f:
                f.write(result)
    except OSError as e:
        logger.error(f" [!] Error writing to output file {path}: {e}")


def write_json(service, subdomain, path):
    """Append one record to the JSON array stored at ``path``, creating it if needed."""
    try:
        with _write_lock:
            records = []
            if os.path.exists(path) and os.path.getsize(path) > 0:
                with open(path, 'r') as f:
                    records = json.load(f)
                if not isinstance(records, list):
                    raise ValueError("existing file does not hold a JSON array")
            records.append(build_record(service, subdomain))
            with open(path, 'w') as f:
                json.dump(records, f, indent=2)
    except (OSError, ValueError) as e:
        logger.error(f" [!] Error writing JSON output for {subdomain} to {path}: {e}")


def report(service, subdomain, output=None, verbose=False):
    """Print the verdict line and persist it; not-vulnerable results only surface in verbose mode."""
    if not service and not verbose:
        return

    result = format_result(service, subdomain)
    sys.stdout.write(result)
    sys.stdout.flush()

    if output:
        if is_json_output(output):
            write_json(service, subdomain, output)
        else:
            write_text(result, output)
