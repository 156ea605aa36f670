import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout

from passage.cli import _parse_kv_args, build_parser, main

NOW = ["--now", "2023-10-01 12:30:00"]


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestParseKvArgs(unittest.TestCase):
    def test_values(self):
        got = _parse_kv_args(["year=2024", "dateTime=2023-10-01 12:00:00", "checkHoliday=false"])
        self.assertEqual(
            got, {"year": 2024, "dateTime": "2023-10-01 12:00:00", "checkHoliday": False}
        )

    def test_missing_equals(self):
        with self.assertRaises(Exception):
            _parse_kv_args(["year"])


class TestCli(unittest.TestCase):
    def test_call_success(self):
        code, out, err = _run(NOW + ["call", "timeSince", "dateTime=2023-09-30 12:00:00"])
        self.assertEqual(code, 0, msg=err)
        self.assertEqual(out.strip(), "24h30m0s")

    def test_call_with_json_arguments(self):
        code, out, _ = _run(NOW + ["call", "isLeapYear", "--json", '{"year": 2024}'])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "2024 is a leap year.")

    def test_call_error_exit_code(self):
        code, out, err = _run(NOW + ["call", "timeUntil", "dateTime=2023-09-30"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err.strip(), "The specified time is in the past")

    def test_call_unknown_tool(self):
        code, _, err = _run(NOW + ["call", "nope"])
        self.assertEqual(code, 1)
        self.assertIn("unknown tool: nope", err)

    def test_call_bad_json(self):
        code, _, err = _run(NOW + ["call", "isLeapYear", "--json", "[1, 2]"])
        self.assertEqual(code, 2)
        self.assertIn("--json must be a JSON object", err)

    def test_trace_flag(self):
        code, out, _ = _run(NOW + ["call", "isWeekend", "dateTime=2023-10-01", "--trace"])
        self.assertEqual(code, 0)
        lines = out.strip().splitlines()
        self.assertTrue(lines[0].startswith("[TOOL] "))
        self.assertEqual(lines[-1], "2023-10-01 is a weekend.")

    def test_list(self):
        code, out, _ = _run(["list"])
        self.assertEqual(code, 0)
        names = [line.split()[0] for line in out.strip().splitlines()]
        self.assertIn("currentDateTime", names)
        self.assertIn("dateCalc", names)

    def test_list_json(self):
        code, out, _ = _run(["list", "--json"])
        self.assertEqual(code, 0)
        specs = json.loads(out)
        names = {s["function"]["name"] for s in specs}
        self.assertIn("previousOccurrence", names)

    def test_serve_options(self):
        ns = build_parser().parse_args(["serve"])
        self.assertEqual(ns.port, -1)
        ns = build_parser().parse_args(["serve", "--port", "8080", "--host", "127.0.0.1"])
        self.assertEqual((ns.port, ns.host), (8080, "127.0.0.1"))

    def test_bad_now(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as cm:
                build_parser().parse_args(["--now", "tomorrow", "list"])
        self.assertEqual(cm.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
