import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from tetrix.cli import demo_game, main
from tetrix.game import GameMode


class TestCli(unittest.TestCase):

    def test_demo_game(self):
        with redirect_stdout(io.StringIO()) as out:
            game = demo_game(seed=3, steps=400)
        self.assertIn(game.mode, (GameMode.PLAYING, GameMode.GAME_OVER))
        self.assertGreater(game.controller.pieces_locked, 0)
        self.assertIn("Pieces locked:", out.getvalue())

    def test_demo_is_reproducible(self):
        with redirect_stdout(io.StringIO()):
            first = demo_game(seed=8, steps=100)
            second = demo_game(seed=8, steps=100)
        self.assertEqual(str(first.controller), str(second.controller))

    def test_main_demo(self):
        with redirect_stdout(io.StringIO()) as out:
            code = main(['demo', '--seed', '1', '--steps', '20', '--next-pieces', '3'])
        self.assertEqual(code, 0)
        self.assertIn("Next:", out.getvalue())

    def test_main_rejects_bad_settings(self):
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()) as err:
            code = main(['demo', '--next-pieces', '9'])
        self.assertEqual(code, 2)
        self.assertIn("next_pieces_count", err.getvalue())

    def test_main_without_command(self):
        with redirect_stdout(io.StringIO()) as out:
            code = main([])
        self.assertEqual(code, 0)
        self.assertIn("tetrix demo", out.getvalue())


if __name__ == '__main__':
    unittest.main()
