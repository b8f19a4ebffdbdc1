import sys, argparse

from .params.schema import MuckerLevel


def parse(argv=None) -> dict:
    parser = argparse.ArgumentParser(
        prog="tune",
        description="""\
Inspect and change the server's tunable parameters as stored in its parm file. \
Settings are applied with the same parsing, privilege checks and default \
tracking the server uses for @tune. To get started, run tune list.""",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("-c", "--config", metavar="PATH", type=str, default=None,
                        help="YAML configuration file. Defaults to tune.yaml in the working directory.")

    parsers = parser.add_subparsers(dest="command")

    list_  = parsers.add_parser(name="list",  help="List readable parameters.",              formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    get    = parsers.add_parser(name="get",   help="Show one parameter.",                    formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    set_   = parsers.add_parser(name="set",   help="Set a parameter and save the parm file.", formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    reset  = parsers.add_parser(name="reset", help="Reset a parameter to its default.",      formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    save   = parsers.add_parser(name="save",  help="Rewrite the parm file in full.",         formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    load   = parsers.add_parser(name="load",  help="Apply assignments from a file.",         formatter_class=argparse.ArgumentDefaultsHelpFormatter)

    def add_common_arguments(p):
        p.add_argument("-l", "--level", metavar="MLEV", type=int, default=None,
                       help=f"Mucker level to act with ({int(MuckerLevel.NONE)}-{int(MuckerLevel.GOD)}). Defaults to the configured level.")
        p.add_argument("-f", "--file", metavar="PARMFILE", type=str, default=None,
                       help="Parm file to operate on. Defaults to the configured parmfile.")

    for p in [list_, get, set_, reset, save, load]:
        add_common_arguments(p)

    # === LIST ===
    list_.add_argument("pattern", type=str, nargs="?", default="", help="Only list parameters whose names match PATTERN (wildcards allowed).")

    # === GET ===
    get.add_argument("name", type=str, help="Parameter name.")

    # === SET ===
    set_.add_argument("name",  type=str, help="Parameter name. A leading '%%' resets it instead.")
    set_.add_argument("value", type=str, nargs="?", default="", help="New value, or '%%' to reset.")

    # === RESET ===
    reset.add_argument("name", type=str, help="Parameter name.")

    # === LOAD ===
    load.add_argument("source", type=str, nargs="?", default=None, help="File to read assignments from and save into the parm file. Without it, the parm file is only checked.")
    load.add_argument("-n", "--count", metavar="LINES", type=int, default=-1, help="Read at most LINES lines (-1 reads the whole file).")
    load.add_argument("-q", "--quiet", action="store_true", default=False, help="Do not acknowledge each line.")

    args: dict = vars(parser.parse_args(argv))

    if args["command"] is None:
        parser.print_help()
        sys.exit(0)

    return args
