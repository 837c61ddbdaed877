import argparse
import asyncio
import json
import sys

from webprobe.core.engine import DEFAULT_TIMEOUT, Scanner
from webprobe.core.errors import InvalidTargetError
from webprobe.core.models import Profile
from webprobe.reporters.console import Log


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Web Application Weakness Scanner")
    p.add_argument("--url", required=True, help="Target URL (http:// or https://)")
    p.add_argument("--profile", default=Profile.EXTENDED.value,
                   choices=[pr.value for pr in Profile],
                   help="legacy: SSL/headers/XSS/SQL only; extended: all 13 checks")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help="Per-request timeout in seconds")
    p.add_argument("--proxy", help="Proxy (e.g. http://127.0.0.1:8080)")
    p.add_argument("--insecure", action="store_true",
                   help="Skip certificate verification")
    p.add_argument("--json", dest="as_json", action="store_true",
                   help="Print the aggregate as JSON instead of a report")
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log = Log(verbose=args.verbose)
    # keep stdout clean for JSON output
    scanner = Scanner(profile=args.profile, timeout=args.timeout, proxy=args.proxy,
                      verify=not args.insecure, logger=None if args.as_json else log)
    try:
        aggregate = asyncio.run(scanner.run(args.url))
    except InvalidTargetError as exc:
        log.fail(str(exc))
        return 2

    if args.as_json:
        print(json.dumps(aggregate.to_dict(), indent=2))
    else:
        log.report(aggregate)
    return 1 if any(v.insecure for v in aggregate) else 0


if __name__ == "__main__":
    sys.exit(main())
