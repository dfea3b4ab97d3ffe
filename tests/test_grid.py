import tempfile
import unittest
from pathlib import Path

from gridsolver.core.constants import Direction
from gridsolver.core.exceptions import GridLoadError
from gridsolver.core.models import BLOCKED_CELL, EMPTY_CELL, Cell, Entry, EntryIndex, GridCoord, Word
from gridsolver.engine.grid import Grid
from gridsolver.io.layout import load_grid, parse_layout

A = Direction.ACROSS
D = Direction.DOWN


class GridTopologyTests(unittest.TestCase):
    def test_single_row_has_one_across_entry(self) -> None:
        grid = Grid.blank(5, 1)
        self.assertEqual(grid.entry_indices(), [EntryIndex(1, A)])
        self.assertEqual(len(grid.get_entry_coords(EntryIndex(1, A))), 5)
        self.assertEqual(grid.entries_perp_to(EntryIndex(1, A)), [])

    def test_short_runs_are_not_entries(self) -> None:
        grid = Grid.blank(2, 2)
        self.assertEqual(grid.entry_indices(), [])

    def test_shared_start_shares_number(self) -> None:
        grid = Grid.blank(3, 3)
        self.assertEqual(
            grid.entry_indices(),
            [
                EntryIndex(1, A),
                EntryIndex(1, D),
                EntryIndex(2, D),
                EntryIndex(3, D),
                EntryIndex(4, A),
                EntryIndex(5, A),
            ],
        )
        self.assertEqual(grid.get_entry_coords(EntryIndex(1, A))[0], GridCoord(0, 0))
        self.assertEqual(grid.get_entry_coords(EntryIndex(1, D))[0], GridCoord(0, 0))

    def test_crossings(self) -> None:
        grid = Grid.blank(3, 3)
        self.assertEqual(
            grid.entries_perp_to(EntryIndex(1, A)),
            [EntryIndex(1, D), EntryIndex(2, D), EntryIndex(3, D)],
        )
        self.assertEqual(
            grid.entries_perp_to(EntryIndex(2, D)),
            [EntryIndex(1, A), EntryIndex(4, A), EntryIndex(5, A)],
        )

    def test_blocked_cells_split_runs(self) -> None:
        grid = parse_layout("5,3\n..#..\n.....\n..#..")
        self.assertEqual(
            grid.entry_indices(),
            [EntryIndex(1, D), EntryIndex(2, D), EntryIndex(3, D), EntryIndex(4, D), EntryIndex(5, A)],
        )
        self.assertEqual(
            grid.get_entry_coords(EntryIndex(5, A)),
            [GridCoord(1, c) for c in range(5)],
        )
        self.assertEqual(len(grid.entries_perp_to(EntryIndex(5, A))), 4)

    def test_unknown_index_is_not_an_error(self) -> None:
        grid = Grid.blank(3, 1)
        missing = EntryIndex(9, D)
        self.assertIsNone(grid.get_entry(missing))
        self.assertIsNone(grid.get_entry_coords(missing))
        self.assertEqual(grid.entries_perp_to(missing), [])
        self.assertFalse(grid.is_entry_filled(missing))
        grid.fill_entry(missing, Word("CAT"))
        grid.clear_entry(missing)
        grid.set_entry(missing, Entry(("A", "B", "C")))
        self.assertEqual(grid.render(), "   ")

    def test_layout_change_rebuilds_topology(self) -> None:
        grid = Grid.blank(3, 3)
        grid.set_cell((1, 1), BLOCKED_CELL)
        self.assertEqual(
            grid.entry_indices(),
            [EntryIndex(1, A), EntryIndex(1, D), EntryIndex(2, D), EntryIndex(3, A)],
        )
        grid.set_cell((1, 1), EMPTY_CELL)
        self.assertEqual(len(grid.entry_indices()), 6)

    def test_writing_letters_keeps_topology(self) -> None:
        grid = Grid.blank(3, 3)
        before = grid.entry_indices()
        grid.set_cell((0, 0), Cell.fillable("x"))
        self.assertEqual(grid.entry_indices(), before)
        self.assertEqual(grid.get_entry(EntryIndex(1, D)), Entry(("X", None, None)))


class GridConstructionTests(unittest.TestCase):
    def test_zero_dimensions_are_rejected(self) -> None:
        with self.assertRaises(GridLoadError):
            Grid.blank(0, 3)
        with self.assertRaises(GridLoadError):
            Grid.from_cells([], 3, 0)
        with self.assertRaises(GridLoadError):
            Grid.from_rows([])

    def test_from_cells_pads_and_truncates(self) -> None:
        padded = Grid.from_cells([BLOCKED_CELL], 2, 2)
        self.assertEqual(padded.cells, [BLOCKED_CELL, EMPTY_CELL, EMPTY_CELL, EMPTY_CELL])

        truncated = Grid.from_cells([BLOCKED_CELL] * 10, 2, 2)
        self.assertEqual(len(truncated.cells), 4)

    def test_from_rows(self) -> None:
        grid = Grid.from_rows([[EMPTY_CELL] * 3, [BLOCKED_CELL]])
        self.assertEqual((grid.width, grid.height), (3, 2))
        self.assertEqual(grid.cell(1, 1), EMPTY_CELL)

    def test_copy_is_independent(self) -> None:
        grid = Grid.blank(3, 3)
        clone = grid.copy()
        clone.fill_entry(EntryIndex(1, A), Word("CAT"))
        self.assertEqual(grid.get_entry(EntryIndex(1, A)), Entry((None, None, None)))
        self.assertEqual(clone.get_entry(EntryIndex(1, A)), Entry(("C", "A", "T")))
        self.assertEqual(clone.entry_indices(), grid.entry_indices())


class GridCellAccessTests(unittest.TestCase):
    def test_out_of_range_access(self) -> None:
        grid = Grid.blank(3, 2)
        self.assertIsNone(grid.get_cell((2, 0)))
        self.assertIsNone(grid.get_cell((0, 3)))
        self.assertIsNone(grid.get_cell((-1, 0)))
        grid.set_cell((5, 5), BLOCKED_CELL)
        self.assertEqual(grid.cells.count(BLOCKED_CELL), 0)

    def test_fill_clear_and_filled_state(self) -> None:
        grid = Grid.blank(3, 1)
        index = EntryIndex(1, A)
        self.assertFalse(grid.is_entry_filled(index))
        grid.fill_entry(index, Word("ten"))
        self.assertTrue(grid.is_entry_filled(index))
        self.assertTrue(grid.is_filled())
        self.assertEqual(grid.get_entry(index).to_word(), Word("TEN"))
        grid.clear_entry(index)
        self.assertEqual(grid.get_entry(index), Entry((None, None, None)))
        self.assertFalse(grid.is_filled())

    def test_blocked_cells_count_as_filled(self) -> None:
        grid = parse_layout("3,2\nCAT\n###")
        self.assertTrue(grid.is_filled())
        self.assertEqual(grid.filled_ratio, 1.0)

    def test_rows_and_cols(self) -> None:
        grid = parse_layout("3,2\nAB#\nC.D")
        self.assertEqual([cell.letter for cell in grid.rows()[1]], ["C", None, "D"])
        self.assertEqual([cell.letter for cell in grid.cols()[0]], ["A", "C"])
        self.assertTrue(grid.cols()[2][0].is_blocked())


class GridRenderingTests(unittest.TestCase):
    def test_render_contract(self) -> None:
        grid = parse_layout("3,2\nC#.\n.AT")
        self.assertEqual(grid.render(), "C█ \n AT")
        self.assertEqual(str(grid), grid.render())

    def test_to_jsonable(self) -> None:
        grid = parse_layout("3,1\nC.T")
        payload = grid.to_jsonable()
        self.assertEqual(payload["rows"], ["C.T"])
        self.assertEqual(
            payload["entries"],
            [{"number": 1, "direction": "ACROSS", "start": [0, 0], "length": 3, "text": "C.T"}],
        )


class LayoutParsingTests(unittest.TestCase):
    def test_parse_blank_layout(self) -> None:
        grid = parse_layout("3,3\n...\n...\n...")
        self.assertEqual((grid.width, grid.height), (3, 3))
        self.assertEqual(len(grid.entry_indices()), 6)

    def test_header_is_width_then_height(self) -> None:
        grid = parse_layout("4, 2\n....\n####\n")
        self.assertEqual((grid.width, grid.height), (4, 2))
        self.assertEqual(grid.entry_indices(), [EntryIndex(1, A)])

    def test_letters_prefill_and_whitespace_is_ignored(self) -> None:
        grid = parse_layout("3,1\nc a t\n")
        self.assertEqual(grid.get_entry(EntryIndex(1, A)), Entry(("C", "A", "T")))

    def test_malformed_layouts(self) -> None:
        for text in ("", "3\n...", "a,b\n...", "0,3\n", "3,1\n..", "3,1\n....", "3,1\n.*.", "3,1\n.ß."):
            with self.subTest(text=text):
                with self.assertRaises(GridLoadError):
                    parse_layout(text)

    def test_load_grid_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "grid.txt"
            path.write_text("3,3\n..#\n...\n#..\n", encoding="utf-8")
            grid = load_grid(path)
            self.assertTrue(grid.cell(0, 2).is_blocked())
            with self.assertRaises(GridLoadError):
                load_grid(Path(tmpdir) / "missing.txt")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
