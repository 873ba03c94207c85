"""Tests for grid, adjacency, grouping, cover and term helpers."""
import unittest

from kmap_solver.kmap_engine import (
    ADJACENCY,
    FALLBACK_LAW,
    Group,
    VariableCount,
    build_grid,
    explain_groups,
    explain_size,
    find_prime_implicants,
    format_explanation,
    grow_group,
    idx_to_rc,
    map_dimensions,
    rc_to_idx,
    select_cover,
    term_for,
)


def _is_power_of_two(value):
    return value > 0 and value & (value - 1) == 0


class TestVariableCount(unittest.TestCase):
    def test_sizes(self):
        self.assertEqual(VariableCount.TWO.size, 4)
        self.assertEqual(VariableCount.THREE.size, 8)
        self.assertEqual(VariableCount.FOUR.size, 16)

    def test_from_value_rejects_unsupported(self):
        for bad in (1, 5, 0):
            with self.assertRaises(ValueError):
                VariableCount.from_value(bad)

    def test_dimensions(self):
        self.assertEqual(map_dimensions(2), (2, 2))
        self.assertEqual(map_dimensions(3), (2, 4))
        self.assertEqual(map_dimensions(4), (4, 4))

    def test_layout_round_trip(self):
        self.assertEqual(idx_to_rc(4, 12), (2, 0))
        self.assertEqual(idx_to_rc(3, 2), (0, 3))
        self.assertEqual(rc_to_idx(3, 0, 2), 3)
        self.assertEqual(rc_to_idx(4, 3, 3), 10)

    def test_layout_covers_every_cell_once(self):
        for count in VariableCount:
            cells = [idx for row in count.layout for idx in row]
            self.assertEqual(sorted(cells), list(range(count.size)))


class TestAdjacency(unittest.TestCase):
    def test_neighbours_differ_in_one_bit(self):
        for count, table in ADJACENCY.items():
            self.assertEqual(sorted(table), list(range(count.size)))
            for cell, neighbours in table.items():
                for other in neighbours:
                    self.assertEqual(bin(cell ^ other).count("1"), 1, (count, cell, other))

    def test_relation_is_symmetric(self):
        for table in ADJACENCY.values():
            for cell, neighbours in table.items():
                for other in neighbours:
                    self.assertIn(cell, table[other])

    def test_degrees(self):
        self.assertTrue(all(len(v) == 2 for v in ADJACENCY[VariableCount.TWO].values()))
        self.assertTrue(all(len(v) == 3 for v in ADJACENCY[VariableCount.THREE].values()))
        self.assertTrue(all(len(v) in (3, 4) for v in ADJACENCY[VariableCount.FOUR].values()))


class TestGrid(unittest.TestCase):
    def test_build_grid(self):
        self.assertEqual(build_grid([1, 3], 2), (0, 1, 0, 1))
        self.assertEqual(build_grid([], 3), (0,) * 8)
        self.assertEqual(sum(build_grid([0, 15, 15], 4)), 2)

    def test_grids_are_independent(self):
        a = build_grid([1], 3)
        b = build_grid([2], 3)
        self.assertNotEqual(a, b)
        self.assertEqual(a, build_grid([1], 3))


class TestGrowGroup(unittest.TestCase):
    def test_zero_start_gives_nothing(self):
        grid = build_grid([1], 3)
        self.assertEqual(grow_group(grid, 0, 2, ADJACENCY[VariableCount.THREE]), [])

    def test_breadth_first_order(self):
        grid = build_grid([0, 1, 2, 3], 3)
        self.assertEqual(grow_group(grid, 0, 4, ADJACENCY[VariableCount.THREE]), [0, 1, 2, 3])

    def test_stops_at_target(self):
        grid = build_grid(range(8), 3)
        self.assertEqual(grow_group(grid, 0, 2, ADJACENCY[VariableCount.THREE]), [0, 1])

    def test_stalls_below_target(self):
        grid = build_grid([1, 5], 3)
        self.assertEqual(grow_group(grid, 1, 4, ADJACENCY[VariableCount.THREE]), [1, 5])

    def test_can_grow_non_rectangular_set(self):
        grid = build_grid([0, 1, 3, 7], 3)
        self.assertEqual(grow_group(grid, 0, 4, ADJACENCY[VariableCount.THREE]), [0, 1, 3, 7])


class TestFindPrimeImplicants(unittest.TestCase):
    def test_three_variable_example(self):
        groups = find_prime_implicants(build_grid([1, 2, 5, 6], 3), 3)
        self.assertEqual(
            [g.cells for g in groups],
            [(1, 5), (2, 6), (1,), (2,), (5,), (6,)],
        )

    def test_deduplicates_by_cell_set(self):
        groups = find_prime_implicants(build_grid([0, 1, 2, 3], 3), 3)
        self.assertEqual(groups[0], Group((0, 1, 2, 3)))
        self.assertEqual(len(groups), len(set(groups)))

    def test_four_variable_component_of_eight(self):
        mins = [1, 4, 5, 6, 12, 13, 14, 15]
        groups = find_prime_implicants(build_grid(mins, 4), 4)
        self.assertEqual(groups[0].cells, tuple(mins))

    def test_invariants_exhaustive_small_maps(self):
        for n in (2, 3):
            size = 1 << n
            for mask in range(1 << size):
                mins = [i for i in range(size) if mask >> i & 1]
                grid = build_grid(mins, n)
                for group in find_prime_implicants(grid, n):
                    self.assertTrue(_is_power_of_two(group.size))
                    self.assertLessEqual(group.size, size)
                    self.assertTrue(all(grid[c] for c in group.cells))
                    self.assertEqual(list(group.cells), sorted(set(group.cells)))

    def test_invariants_sampled_four_variable_maps(self):
        for mask in range(0, 1 << 16, 251):
            mins = [i for i in range(16) if mask >> i & 1]
            grid = build_grid(mins, 4)
            for group in find_prime_implicants(grid, 4):
                self.assertTrue(_is_power_of_two(group.size))
                self.assertTrue(all(grid[c] for c in group.cells))
                self.assertIsInstance(term_for(group, 4), str)


class TestSelectCover(unittest.TestCase):
    def test_largest_first(self):
        groups = [Group((0,)), Group((0, 1)), Group((1, 2))]
        self.assertEqual(select_cover(groups, [0, 1, 2]), [Group((0, 1)), Group((1, 2))])

    def test_ties_keep_discovery_order(self):
        groups = [Group((2, 3)), Group((0, 1)), Group((1, 2))]
        self.assertEqual(select_cover(groups, [0, 1, 2, 3]), [Group((2, 3)), Group((0, 1))])

    def test_skips_groups_adding_nothing(self):
        groups = [Group((0, 1)), Group((1,)), Group((0,)), Group((3,))]
        self.assertEqual(select_cover(groups, [0, 1, 3]), [Group((0, 1)), Group((3,))])

    def test_cover_is_complete(self):
        for n in (2, 3):
            size = 1 << n
            for mask in range(1, (1 << size) - 1):
                mins = [i for i in range(size) if mask >> i & 1]
                chosen = select_cover(find_prime_implicants(build_grid(mins, n), n), mins)
                covered = {c for g in chosen for c in g.cells}
                self.assertEqual(covered & set(mins), set(mins))


class TestTermFor(unittest.TestCase):
    def test_two_variables(self):
        self.assertEqual(term_for(Group((0, 1, 2, 3)), 2), "1")
        self.assertEqual(term_for(Group((1, 3)), 2), "B")
        self.assertEqual(term_for(Group((0, 2)), 2), "B'")
        self.assertEqual(term_for(Group((2, 3)), 2), "A")
        self.assertEqual(term_for(Group((2,)), 2), "AB'")

    def test_three_variable_quads(self):
        self.assertEqual(term_for(Group((0, 1, 2, 3)), 3), "A'")
        self.assertEqual(term_for(Group((0, 2, 4, 6)), 3), "C'")
        self.assertEqual(term_for(Group((1, 3, 5, 7)), 3), "C")
        self.assertEqual(term_for(Group((0, 1, 3, 7)), 3), "")

    def test_three_variable_pairs(self):
        self.assertEqual(term_for(Group((1, 5)), 3), "B'C")
        self.assertEqual(term_for(Group((2, 6)), 3), "BC'")
        self.assertEqual(term_for(Group((6, 7)), 3), "AB")
        # Pairs along the C axis have no entry.
        self.assertEqual(term_for(Group((0, 2)), 3), "")
        self.assertEqual(term_for(Group((5, 7)), 3), "")

    def test_three_variable_singles_use_gray_ordered_table(self):
        self.assertEqual(term_for(Group((0,)), 3), "A'B'C'")
        self.assertEqual(term_for(Group((2,)), 3), "A'BC")
        self.assertEqual(term_for(Group((3,)), 3), "A'BC'")
        self.assertEqual(term_for(Group((7,)), 3), "ABC'")

    def test_three_variable_full(self):
        self.assertEqual(term_for(Group(tuple(range(8))), 3), "1")

    def test_four_variables(self):
        self.assertEqual(term_for(Group(tuple(range(16))), 4), "1")
        self.assertEqual(term_for(Group((0,)), 4), "A'B'C'D'")
        self.assertEqual(term_for(Group((5,)), 4), "A'BC'D")
        self.assertEqual(term_for(Group((10,)), 4), "AB'CD'")
        self.assertEqual(term_for(Group((0, 1)), 4), "")
        self.assertEqual(term_for(Group((0, 1, 4, 5)), 4), "")
        self.assertEqual(term_for(Group((0, 1, 2, 3, 4, 5, 6, 7)), 4), "")

    def test_total_over_power_of_two_groups(self):
        for n in (2, 3, 4):
            size = 1 << n
            for width in (1, 2, 4, 8, 16):
                if width > size:
                    continue
                for start in range(size - width + 1):
                    self.assertIsInstance(term_for(Group(tuple(range(start, start + width))), n), str)


class TestExplanations(unittest.TestCase):
    def test_law_table(self):
        self.assertEqual(explain_size(1).name, "No Simplification")
        self.assertEqual(explain_size(2).name, "Adjacency Law")
        self.assertEqual(explain_size(4).name, "Consensus & Absorption Laws")
        self.assertEqual(explain_size(8).name, "Full Variable Elimination")
        self.assertEqual(explain_size(16).name, "Tautology Law")
        self.assertEqual(explain_size(3), FALLBACK_LAW)
        self.assertEqual(FALLBACK_LAW.name, "Simplification Applied")

    def test_explain_groups(self):
        items = explain_groups([Group((1, 5)), Group((0, 1))], 4)
        self.assertEqual(items[0].law, "Adjacency Law")
        self.assertEqual(items[0].term, "")
        self.assertEqual(items[1].cells, (0, 1))

    def test_format_explanation(self):
        self.assertEqual(format_explanation([]), "No groups formed.")
        text = format_explanation(explain_groups([Group((1, 5))], 3))
        self.assertTrue(text.startswith("Boolean Simplification Steps:"))
        self.assertIn("Group 1: Cells [1, 5]", text)
        self.assertIn("  Term: B'C", text)
        self.assertIn("  Law: Adjacency Law", text)


if __name__ == "__main__":
    unittest.main()
