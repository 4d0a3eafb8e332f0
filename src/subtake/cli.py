import argparse
import logging
import sys
from subtake.config import logger, DEFAULT_THREADS, DEFAULT_TIMEOUT
from subtake.fingerprints import FingerprintError
from subtake.scanner import TakeoverScanner, TargetListError


def build_parser():
    parser = argparse.ArgumentParser(description="Subdomain takeover scanner: CNAME triage and service fingerprinting",
                                     formatter_class=argparse.RawTextHelpFormatter)
    targets = parser.add_mutually_exclusive_group(required=True)
    targets.add_argument("-d", "--domain", help="Single subdomain to check (e.g., shop.example.com)")
    targets.add_argument("-w", "--wordlist", help="Path to a file of subdomains to check, one per line.")
    parser.add_argument("-t", "--threads", type=int, default=DEFAULT_THREADS, help=f"Number of concurrent threads (default: {DEFAULT_THREADS}).")
    parser.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT, help=f"Seconds to wait for each HTTP fetch and DNS lookup (default: {DEFAULT_TIMEOUT}).")
    parser.add_argument("-o", "--output", help="File to save results to. A '.json' suffix writes a JSON array, anything else plain text.")
    parser.add_argument("--ssl", action="store_true", dest="force_ssl", help="Force HTTPS when fetching the subdomain's page.")
    parser.add_argument("-a", "--all", action="store_true", dest="check_all", help="Fetch every subdomain, not only those whose CNAME matches a fingerprinted service.")
    parser.add_argument("-m", "--manual", action="store_true", help="Report every NXDOMAIN subdomain with a dead CNAME (DOMAIN_DEAD), even when it is not registrable.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show NOT_VULNERABLE results and debug messages.")
    parser.add_argument("-c", "--config", help="Path to a fingerprints JSON file (default: bundled catalog or $SUBTAKE_FINGERPRINTS).")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if args.timeout <= 0:
        logger.critical("Timeout must be a positive number of seconds.")
        return 1

    try:
        scanner = TakeoverScanner(
            domain=args.domain,
            wordlist_path=args.wordlist,
            threads=args.threads,
            timeout=args.timeout,
            output_file=args.output,
            force_ssl=args.force_ssl,
            check_all=args.check_all,
            manual=args.manual,
            verbose=args.verbose,
            fingerprints_path=args.config,
        )
        scanner.run()
    except (FingerprintError, TargetListError) as e:
        logger.critical(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.critical(f"An unhandled error occurred during the scan: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
