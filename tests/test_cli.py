import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from gridsolver.cli import EXIT_LOAD_ERROR, EXIT_OK, EXIT_UNSOLVED, main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.root = Path(self._tmpdir.name)
        self.grid = self._write("grid.txt", "3,3\n...\n...\n...\n")
        self.words = self._write("words.txt", "cat\nare\nten\n")
        self.ranked = self._write("ranked.txt", "cat;90\nare;80\nten;70\ntea;10\n")

    def _write(self, name: str, text: str) -> Path:
        path = self.root / name
        path.write_text(text, encoding="utf-8")
        return path

    def _run(self, *args: str):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = main([*args, "--log-level", "ERROR"])
        return code, stdout.getvalue()

    def test_fills_grid_and_writes_json(self) -> None:
        output = self.root / "out.json"
        code, printed = self._run(
            "--grid", str(self.grid), "--dict", str(self.words), "--seed", "5", "--output", str(output)
        )
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(printed.splitlines(), ["CAT", "ARE", "TEN"])

        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(payload["rows"], ["CAT", "ARE", "TEN"])
        self.assertEqual(payload["seed"], 5)
        self.assertEqual(len(payload["entries"]), 6)
        self.assertNotIn("average_score", payload)

    def test_ranked_run_prints_average(self) -> None:
        code, printed = self._run("-g", str(self.grid), "-d", str(self.ranked), "--ranked")
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(printed.splitlines(), ["CAT", "ARE", "TEN", "80.00"])

    def test_stats_output(self) -> None:
        code, printed = self._run("-g", str(self.grid), "-d", str(self.words), "--stats", "--seed", "1")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("--- Search ---", printed)
        self.assertIn("Seed: 1", printed)

    def test_ranked_stats_also_print_average(self) -> None:
        code, printed = self._run("-g", str(self.grid), "-d", str(self.ranked), "--ranked", "--stats")
        self.assertEqual(code, EXIT_OK)
        self.assertIn("--- Ranks ---", printed)
        self.assertEqual(printed.splitlines()[-1], "80.00")

    def test_prefilled_entries_need_not_be_words(self) -> None:
        grid = self._write("plus.txt", "3,3\n#.#\nXYZ\n#.#\n")
        words = self._write("eye.txt", "eye\n")
        code, printed = self._run("-g", str(grid), "-d", str(words))
        self.assertEqual(code, EXIT_OK)
        self.assertEqual(printed.splitlines(), ["█E█", "XYZ", "█E█"])

    def test_missing_input_is_a_load_error(self) -> None:
        code, _ = self._run("-g", str(self.root / "nope.txt"), "-d", str(self.words))
        self.assertEqual(code, EXIT_LOAD_ERROR)
        code, _ = self._run("-g", str(self.grid), "-d", str(self.root / "nope.txt"))
        self.assertEqual(code, EXIT_LOAD_ERROR)

    def test_malformed_layout_is_a_load_error(self) -> None:
        bad = self._write("bad.txt", "3,3\n..\n")
        code, _ = self._run("-g", str(bad), "-d", str(self.words))
        self.assertEqual(code, EXIT_LOAD_ERROR)

    def test_unsolvable_grid(self) -> None:
        words = self._write("short.txt", "ox\ntent\n")
        code, printed = self._run("-g", str(self.grid), "-d", str(words), "--max-attempts", "3")
        self.assertEqual(code, EXIT_UNSOLVED)
        self.assertEqual(printed, "")

    def test_invalid_attempt_budget_is_a_usage_error(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                self._run("-g", str(self.grid), "-d", str(self.words), "--max-attempts", "0")
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
