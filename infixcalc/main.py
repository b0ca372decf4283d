"""Runs infixcalc on a file of expressions (one per line) or in command-line mode. Also uses error handling context
manager. Installed as the infixcalc console script.
"""

import argparse

from infixcalc.lang.error import ErrorHandler
from infixcalc.lang.numerical import DEFAULT_PRECISION, check_precision
from infixcalc.lang.session import Session
from infixcalc.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="infixcalc", description="Evaluate infix arithmetic expressions.")
    parser.add_argument("file", help="file of expressions to evaluate (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--strict", action="store_true",
                        help="stop at the first error with exit status 1 (file mode only)")
    parser.add_argument("--precision", type=check_precision, default=DEFAULT_PRECISION,
                        help=f"significant digits of printed results (default: {DEFAULT_PRECISION})")
    parser.add_argument("--tree", action="store_true", help="print the expression tree before each result")
    return parser


def main(argv=None):
    """Runs infixcalc. Returns the process exit status."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.file is None:
            sess = Session(error_handler, cmd_line=True, precision=args.precision, show_tree=args.tree)
            Shell(sess).cmdloop()
            return 0

        sess = Session(error_handler, args.file, cmd_line=False, precision=args.precision, show_tree=args.tree)
        error_handler.fatal = args.strict

        for expr, line_num in sess.lines:
            with error_handler:
                sess.add(expr, line_num)
                sess.run()

        return 1 if error_handler.errors else 0

    return 1  # error was reported by error_handler
