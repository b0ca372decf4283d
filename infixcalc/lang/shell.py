"""Handles interactive/command-line mode for infixcalc. Uses cmd as backend."""

import cmd

from infixcalc.lang.session import Session
from infixcalc.pure.parser import parse


class Shell(cmd.Cmd):
    """Expression calculator shell."""
    intro = ("Expression calculator :: Python backend\n"
             "Enter an expression (e.g., 2 + 3 * (4 - 1)) or 'quit' to exit. Type 'help' for more information.")
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates arbitrary expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = Session.preprocess_line(f"{self._tmp_line} {line}")

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                self.sess.pop()  # already printed by run

    def do_tree(self, arg):
        """tree EXPR: shows the expression tree that EXPR parses into, without evaluating it."""
        with self.sess.error_handler:
            expr, __ = Session.preprocess_line(arg)
            self.sess.error_handler.register_line(None, expr, self.line_num)
            tree = parse(expr)
            self.sess.write(f"{tree}\n{tree.display()}")
            self.sess.error_handler.remove_line()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.sess.write("Welcome to the infixcalc shell!\n\n"
                        "Type an arithmetic expression and press enter to evaluate it. Numbers may have a \n"
                        "decimal point, the operators are + - * / (* and / bind tighter than + and -, and \n"
                        "operators of equal precedence group from the left), and parentheses can be nested \n"
                        "freely. An expression with unclosed parentheses continues on the next line.\n\n"
                        "Try '2 + 3 * (4 - 1)', which gives 11. 'tree 2 + 3 * 4' shows how an expression \n"
                        "is grouped, and '#' starts a comment. Type 'quit' or press Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits shell."""
        self.sess.write("")
        return self.do_quit(arg)

    def do_quit(self, arg):
        """Exits shell."""
        return True

    do_exit = do_quit
