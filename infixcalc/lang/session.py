"""Session control for infixcalc. Runs expressions one line at a time, either in command-line mode or file
interpretation mode.
"""

import math
import sys

from infixcalc.lang.error import CalcException
from infixcalc.lang.numerical import DEFAULT_PRECISION, format_number
from infixcalc.pure.parser import parse


class Session:
    """Governs a calculator session: parsed expressions waiting to be run and the results of those already run."""
    SH_FILE = "<in>"  # command-line interpreter filename
    QUIT = "quit"     # stops reading input
    COMMENT = "#"

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True, precision=DEFAULT_PRECISION, show_tree=False,
                 out=None):
        self.error_handler = error_handler

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.precision = precision  # significant digits of printed results
        self.show_tree = show_tree  # whether or not to print expression trees before results
        self.out = out

        self.lines = []    # list of (expr, line num) read from path
        self.to_exec = {}  # dict of line num: (expr, ExpressionNode) to evaluate
        self.results = []  # values of evaluated expressions, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.lines = Session.read_lines(file)
            except OSError:
                raise CalcException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise CalcException("'{}' is a reserved filename", Session.SH_FILE, diagnosis=False)

    @staticmethod
    def preprocess_line(line):
        """Strips comments and surrounding whitespace from line. Returns updated line and whether or not it continues on
        the next line (it does while it has more '(' than ')').
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]

        line = line.strip()
        return line, line.count("(") > line.count(")")

    @staticmethod
    def read_lines(lines):
        """Returns list of (expr, line num) from iterable of lines. Blank lines are skipped, lines with unclosed
        parentheses are joined with the following ones, and reading stops at a 'quit' line. The line num of a joined
        expr is the line num of its first line.
        """
        exprs = []
        prev, first_line_num = "", None

        for line_num, line in enumerate(lines, start=1):
            line, add_to_prev = Session.preprocess_line(f"{prev} {line}")
            if not prev and line == Session.QUIT:
                break

            if first_line_num is None:
                first_line_num = line_num

            if add_to_prev:
                prev = line
            else:
                if line:
                    exprs.append((line, first_line_num))
                prev, first_line_num = "", None

        if prev:
            exprs.append((prev, first_line_num))  # unclosed at end of input, parse will report it
        return exprs

    def _location(self):
        return None if self.cmd_line else self.path

    def add(self, expr, line_num):
        """Parses expr and adds it to the current session. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self._location(), expr, line_num)  # in case error is raised

        self.to_exec[line_num] = (expr, parse(expr))

        self.error_handler.remove_line()  # error was not raised

    def run(self):
        """Evaluates this session's parsed expressions and prints their results. Will raise any errors that are
        encountered.
        """
        for line_num, (expr, tree) in list(self.to_exec.items()):
            self.error_handler.register_line(self._location(), expr, line_num)

            try:
                value = tree.evaluate()
            finally:
                del self.to_exec[line_num]

            if self.show_tree:
                self.write(tree.display())
            if not math.isfinite(value):
                self.error_handler.warn("result of '{}' is not a finite number", expr)

            self.results.append(value)
            self.write(f"Result: {format_number(value, self.precision)}")

            self.error_handler.remove_line()

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    def write(self, msg):
        """Prints msg to this session's output stream (stdout unless given)."""
        print(msg, file=self.out if self.out is not None else sys.stdout)
