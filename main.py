import logging
import operator
import sys
from functools import reduce

from rich.console import Console
from rich.logging import RichHandler

from switchboard import ArgParser

__prog__ = "calc"


def main(argv=None):
    argv = sys.argv if argv is None else argv

    logging.basicConfig(
        level=logging.DEBUG if "--debug" in argv else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    values = []
    parser = ArgParser("calc")
    parser.add_int_option("N").with_multivalue(1).as_positional().bind_external_sequence(values)
    parser.add_flag("sum", "add args")
    parser.add_flag("mult", "multiply args")
    parser.add_flag("debug", "log parsing steps")
    parser.add_help_option("h", "help", "Program accumulate arguments")

    if not parser.parse(argv):
        parser.report()
        parser.print_help()
        return 1

    if parser.wants_help():
        parser.print_help()
        return 0

    if parser.get_flag("sum"):
        print(sum(values))
    elif parser.get_flag("mult"):
        print(reduce(operator.mul, values, 1))
    else:
        print(" ".join(map(str, values)))
    return 0


if __name__ == '__main__':
    sys.exit(main())
