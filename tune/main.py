#!/usr/bin/env python3

import sys

from tune         import args, state
from tune.common  import TuneException
from tune.printer import cons
from tune.tune_cmd import tune


def main(argv=None) -> int:
    try:
        state.gARG = args.parse(argv)
        state.gCFG = state.load(state.gARG["config"])

        tune()

    except TuneException as exc:
        cons.reset()
        cons.print(f"""\
[bold red]Error[/bold red]: {str(exc)}
""", highlight=False)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as exc:
        cons.reset()
        cons.print_exception()
        cons.print(f"""\
[bold red]ERROR[/bold red]: An unexpected exception occurred: {str(exc)}
""")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
