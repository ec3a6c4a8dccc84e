import unittest

from tetrix.pieces import PIECES, PieceType, make_shape
from tetrix.rotation import CLOCKWISE, COUNTER_CLOCKWISE, rotate_left, rotate_right, rotated


class TestRotation(unittest.TestCase):

    def test_rotate_right_t(self):
        # [[0,1,0], [1,1,1]] turned clockwise
        expected = make_shape([[1, 0],
                               [1, 1],
                               [1, 0]])
        self.assertEqual(rotate_right(PIECES[PieceType.T].shape), expected)

    def test_rotate_left_t(self):
        expected = make_shape([[0, 1],
                               [1, 1],
                               [0, 1]])
        self.assertEqual(rotate_left(PIECES[PieceType.T].shape), expected)

    def test_rotate_swaps_dimensions(self):
        i_shape = PIECES[PieceType.I].shape
        self.assertEqual(rotate_right(i_shape), make_shape([[1], [1], [1], [1]]))
        self.assertEqual(rotate_left(i_shape), make_shape([[1], [1], [1], [1]]))

    def test_index_formulas(self):
        shape = PIECES[PieceType.L].shape
        height, width = len(shape), len(shape[0])
        left = rotate_left(shape)
        right = rotate_right(shape)
        self.assertEqual((len(left), len(left[0])), (width, height))
        for i in range(width):
            for j in range(height):
                self.assertEqual(left[i][j], shape[j][width - 1 - i])
                self.assertEqual(right[i][j], shape[height - 1 - j][i])

    def test_left_then_right_is_identity(self):
        for piece in PIECES.values():
            with self.subTest(piece=piece.piece_type.name):
                self.assertEqual(rotate_right(rotate_left(piece.shape)), piece.shape)
                self.assertEqual(rotate_left(rotate_right(piece.shape)), piece.shape)

    def test_four_turns_is_identity(self):
        shape = PIECES[PieceType.S].shape
        turned = shape
        for _ in range(4):
            turned = rotate_right(turned)
        self.assertEqual(turned, shape)

    def test_rotated_keeps_type(self):
        z_piece = PIECES[PieceType.Z]
        clockwise = rotated(z_piece, CLOCKWISE)
        self.assertEqual(clockwise.piece_type, PieceType.Z)
        self.assertEqual(clockwise.shape, rotate_right(z_piece.shape))
        self.assertEqual(rotated(z_piece, COUNTER_CLOCKWISE).shape, rotate_left(z_piece.shape))
        self.assertEqual(z_piece, PIECES[PieceType.Z])

    def test_invalid_direction(self):
        with self.assertRaises(ValueError):
            rotated(PIECES[PieceType.T], 2)


if __name__ == '__main__':
    unittest.main()
