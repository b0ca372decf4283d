import io
import os
import tempfile
import unittest
from unittest import mock

from infixcalc.lang import error
from infixcalc.lang.error import CalcException, DivisionByZeroError, ErrorHandler, ParseError
from infixcalc.lang.session import Session


def plain(text, *args, **kwargs):
    return text


class PreprocessTestCase(unittest.TestCase):

    def test_preprocess_line(self):
        cases = {
            "  2 + 3  \n": ("2 + 3", False),
            "2 + 3 # five": ("2 + 3", False),
            "# only a comment": ("", False),
            "(1 +": ("(1 +", True),
            "((1 + 2)": ("((1 + 2)", True),
            "1 + 2)": ("1 + 2)", False),
            "": ("", False),
        }
        for case, result in cases.items():
            self.assertEqual(result, Session.preprocess_line(case), case)

    def test_read_lines(self):
        lines = [
            "2 + 3 * 4\n",
            "\n",
            "# comment\n",
            "(1 +\n",
            "  2) * 3  # continued\n",
            "5 / 0\n",
            "quit\n",
            "7\n",
        ]
        expected = [("2 + 3 * 4", 1), ("(1 +   2) * 3", 4), ("5 / 0", 6)]
        self.assertEqual(expected, Session.read_lines(lines))

    def test_read_lines_unclosed(self):
        self.assertEqual([("1", 1), ("(2 + 3", 2)], Session.read_lines(["1", "(2 +", "3"]))


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.handler = ErrorHandler(fatal=False, stream=io.StringIO())
        self.sess = Session(self.handler, out=self.out)

    def test_cmd_line_not_fatal(self):
        handler = ErrorHandler(fatal=True)
        Session(handler, cmd_line=True)
        self.assertFalse(handler.fatal)

    def test_add_and_run(self):
        self.sess.add("2 + 3 * 4", 1)
        self.assertIn(1, self.sess.to_exec)
        self.sess.run()

        self.assertEqual({}, self.sess.to_exec)
        self.assertEqual([14.0], self.sess.results)
        self.assertEqual("Result: 14\n", self.out.getvalue())
        self.assertEqual(14.0, self.sess.pop())

    def test_errors_propagate(self):
        self.assertRaises(ParseError, self.sess.add, "2 3", 1)
        self.assertEqual({}, self.sess.to_exec)

        self.sess.add("5 / 0", 2)
        self.assertRaises(DivisionByZeroError, self.sess.run)
        self.assertEqual({}, self.sess.to_exec)  # failed expression is not retried
        self.assertEqual([], self.sess.results)

    def test_handler_keeps_going(self):
        for line_num, expr in enumerate(["2 3", "5 / 0", "(2 + 3) * 4"], start=1):
            with self.handler:
                self.sess.add(expr, line_num)
                self.sess.run()

        self.assertEqual(2, self.handler.errors)
        self.assertEqual([20.0], self.sess.results)
        self.assertEqual("Result: 20\n", self.out.getvalue())

    def test_precision_and_tree(self):
        sess = Session(self.handler, precision=3, show_tree=True, out=self.out)
        sess.add("1 / 3", 1)
        sess.run()
        self.assertEqual("BinaryOperationNode(operator='/', nodes=[\n"
                         "    NumberNode(value=1),\n"
                         "    NumberNode(value=3)\n"
                         "])\n"
                         "Result: 0.333\n", self.out.getvalue())

    @mock.patch.object(error, "colored", plain)
    def test_not_finite_warning(self):
        huge = "9" * 200
        self.sess.add(f"{huge} * {huge} * {huge}", 1)
        self.sess.run()
        self.assertEqual("Result: inf\n", self.out.getvalue())
        self.assertIn("Warning: result of", self.handler.stream.getvalue())

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "exprs.txt")
            with open(path, "w") as file:
                file.write("1 + 1\n(2 *\n3)\nquit\n4\n")

            handler = ErrorHandler(fatal=True)
            sess = Session(handler, path, cmd_line=False)
            self.assertTrue(handler.fatal)
            self.assertEqual([("1 + 1", 1), ("(2 * 3)", 2)], sess.lines)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "missing.txt")
            self.assertRaises(CalcException, Session, self.handler, path, False)

    def test_reserved_filename(self):
        self.assertRaises(CalcException, Session, self.handler, Session.SH_FILE, False)


if __name__ == '__main__':
    unittest.main()
