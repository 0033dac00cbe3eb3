"""Uses the exprsolver pipeline to solve a single expression given on the command line, and prints it in canonical form
along with its value. Also uses error handling context manager. Called from the exprsolver executable script.
"""

import argparse

from exprsolver.lang.error import ErrorHandler, GenericException
from exprsolver.lang.session import Session

DEFAULT_SOURCE = "2 - 3 * 4"
MAX_EXACT = 1e16  # integral floats beyond this are printed in scientific notation


def format_number(value):
    """Returns value as text: integral values without a trailing '.0', everything else like repr."""
    if value.is_integer() and abs(value) <= MAX_EXACT:
        return str(int(value))
    return repr(value)


def parse_definition(definition):
    """Splits a NAME=VALUE command-line definition into (name, float value)."""
    name, sep, value = definition.partition("=")
    name = name.strip()

    members = name.split(".")
    if not sep or not all(member[:1].isalpha() and member.isalnum() for member in members):
        raise GenericException("'{}' is not a valid definition, expected NAME=VALUE", definition, diagnosis=False)

    try:
        return name, float(value)
    except ValueError:
        raise GenericException("'{}' does not define a number", definition, diagnosis=False) from None


def main(argv=None):
    """Runs exprsolver. Called from exprsolver executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="exprsolver", description="Solve a single-line arithmetic expression.")
        parser.add_argument("expression", help=f"expression to solve (default: '{DEFAULT_SOURCE}')", nargs="?",
                            default=DEFAULT_SOURCE)
        parser.add_argument("-D", "--define", help="define a constant, e.g. -D tau=6.283", metavar="NAME=VALUE",
                            action="append", default=[])
        parser.add_argument("--tree", help="also print the syntax tree", action="store_true")
        args = parser.parse_args(argv)

        sess = Session(error_handler)
        for definition in args.define:
            sess.define(*parse_definition(definition))

        if args.tree:
            print(sess.parse(args.expression).display())

        text, value = sess.run(args.expression)
        print(text, "=", format_number(value))


if __name__ == "__main__":
    main()
