import random
import unittest
from collections import Counter

from tetrix.pieces import COLORS, PIECES, Piece, PieceFactory, PieceType, Position, make_shape


class TestCatalog(unittest.TestCase):

    def test_all_seven_pieces_defined(self):
        self.assertEqual(set(PIECES), set(PieceType))
        for piece_type, piece in PIECES.items():
            self.assertEqual(piece.piece_type, piece_type)
            self.assertEqual(len(list(piece.cells())), 4)  # Every tetromino has 4 blocks

    def test_canonical_shapes(self):
        self.assertEqual(PIECES[PieceType.I].shape, make_shape([[1, 1, 1, 1]]))
        self.assertEqual(PIECES[PieceType.O].shape, make_shape([[1, 1], [1, 1]]))
        self.assertEqual(PIECES[PieceType.T].shape, make_shape([[0, 1, 0], [1, 1, 1]]))
        self.assertEqual(PIECES[PieceType.S].shape, make_shape([[0, 1, 1], [1, 1, 0]]))
        self.assertEqual(PIECES[PieceType.Z].shape, make_shape([[1, 1, 0], [0, 1, 1]]))
        self.assertEqual(PIECES[PieceType.J].shape, make_shape([[1, 0, 0], [1, 1, 1]]))
        self.assertEqual(PIECES[PieceType.L].shape, make_shape([[0, 0, 1], [1, 1, 1]]))

    def test_colors(self):
        self.assertEqual(PIECES[PieceType.I].color, "cyan")
        self.assertEqual(PIECES[PieceType.O].color, "yellow")
        self.assertEqual(len(set(COLORS.values())), 7)

    def test_dimensions_and_cells(self):
        t_piece = PIECES[PieceType.T]
        self.assertEqual((t_piece.height, t_piece.width), (2, 3))
        # T shape: [[0,1,0], [1,1,1]]
        self.assertEqual(sorted(t_piece.cells()), sorted([(1, 0), (0, 1), (1, 1), (2, 1)]))

    def test_definition_returns_catalog_piece(self):
        rotated_s = Piece(PieceType.S, make_shape([[1, 0], [1, 1], [0, 1]]))
        self.assertIs(rotated_s.definition(), PIECES[PieceType.S])

    def test_pieces_are_immutable(self):
        with self.assertRaises(AttributeError):
            PIECES[PieceType.O].shape = ()


class TestPosition(unittest.TestCase):

    def test_shifted(self):
        position = Position(4, 0)
        self.assertEqual(position.shifted(dx=-1), Position(3, 0))
        self.assertEqual(position.shifted(dy=2), Position(4, 2))
        self.assertEqual(position, Position(4, 0))  # Original untouched


class TestPieceFactory(unittest.TestCase):

    def test_generates_catalog_pieces(self):
        factory = PieceFactory(random.Random(1))
        for _ in range(50):
            self.assertIn(factory.generate(), PIECES.values())

    def test_seeded_factories_agree(self):
        first = PieceFactory(random.Random(42))
        second = PieceFactory(random.Random(42))
        self.assertEqual([first.generate() for _ in range(20)],
                         [second.generate() for _ in range(20)])

    def test_uniform_distribution(self):
        factory = PieceFactory(random.Random(7))
        counts = Counter(factory.generate().piece_type for _ in range(7000))
        self.assertEqual(set(counts), set(PieceType))
        for piece_type, count in counts.items():
            self.assertTrue(800 < count < 1200, f"{piece_type.name} drawn {count} times")

    def test_no_bag_repeats_allowed(self):
        # Independent draws repeat back to back about one time in seven.
        factory = PieceFactory(random.Random(3))
        draws = [factory.generate() for _ in range(1000)]
        repeats = sum(1 for a, b in zip(draws, draws[1:]) if a == b)
        self.assertGreater(repeats, 50)


if __name__ == '__main__':
    unittest.main()
