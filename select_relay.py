import argparse
import logging
import sys

from relay_select.catalog import RetrievalError, fetch_servers
from relay_select.config import DEFAULT_SERVER_TYPE, EXIT_NO_RESULT, EXIT_OK, EXIT_RETRIEVAL_FAILED
from relay_select.output import display_hostname, format_ranked_table, to_json
from relay_select.selector import select_best, select_top_n

logger = logging.getLogger("select_relay")


def positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return n


def build_parser():
    parser = argparse.ArgumentParser(
        prog="select-relay",
        description="Find the lowest-latency relay server.",
    )
    parser.add_argument("-o", "--output", choices=["plain", "json", "table"], default="plain",
                        help="Output format. 'json' outputs server json")
    parser.add_argument("-c", "--country", default=None,
                        help="Server country code, e.g. ch for Switzerland (default: any)")
    parser.add_argument("-t", "--type", dest="server_type", default=DEFAULT_SERVER_TYPE,
                        help="Server type, e.g. wireguard")
    parser.add_argument("-n", "--count", type=positive_int, default=1,
                        help="Number of servers to return, fastest first")
    parser.add_argument("--diskless", action="store_true",
                        help="Only consider diskless (stboot) servers")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0,
                           help="Increase log verbosity (-vv for debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only log errors")
    return parser


def configure_logging(verbose=0, quiet=False):
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        servers = fetch_servers(args.server_type)
    except RetrievalError as e:
        logger.error("Could not retrieve server list: %s", e)
        return EXIT_RETRIEVAL_FAILED

    if args.count == 1:
        best = select_best(servers, args.country, args.diskless)
        shortlist = [best] if best else []
    else:
        shortlist = select_top_n(servers, args.country, args.diskless, args.count)

    if not shortlist:
        print("No eligible server found.", file=sys.stderr)
        return EXIT_NO_RESULT

    if args.output == "json":
        print(to_json(shortlist[0].server) if args.count == 1 else to_json(shortlist))
    elif args.output == "table":
        print(format_ranked_table(shortlist))
    else:
        for measurement in shortlist:
            print(display_hostname(measurement.server.hostname))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
