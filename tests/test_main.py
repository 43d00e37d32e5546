import unittest
import io
import sys
import os
import shutil
from contextlib import redirect_stdout
import pygame

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wilson_maze.main import main

class TestMain(unittest.TestCase):
    def setUp(self):
        os.makedirs("test_out", exist_ok=True)

    def tearDown(self):
        shutil.rmtree("test_out", ignore_errors=True)

    def test_generate(self):
        path = "test_out/cli.png"
        code = main(["generate", "--width", "4", "--height", "3", "--cell-size", "10",
                     "--seed", "7", "--out", path])
        self.assertEqual(code, 0)
        self.assertEqual(pygame.image.load(path).get_size(), (40, 30))

    def test_generate_dump(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["generate", "--width", "5", "--height", "2", "--seed", "1",
                         "--out", "test_out/dump.png", "--dump"])
        self.assertEqual(code, 0)
        lines = buf.getvalue().splitlines()
        self.assertEqual(len(lines), 2 * 2 + 1)
        self.assertTrue(all(len(line) == 2 * 5 + 1 for line in lines))
        self.assertNotIn("X", buf.getvalue())

    def test_generate_empty_fails_render(self):
        code = main(["generate", "--width", "0", "--height", "0", "--out", "test_out/empty.png"])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists("test_out/empty.png"))

    def test_invalid_arguments(self):
        self.assertEqual(main(["generate", "--cell-size", "0", "--out", "test_out/x.png"]), 2)

    def test_benchmark(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["benchmark", "--sizes", "5", "8"])
        self.assertEqual(code, 0)
        self.assertIn("5x5", buf.getvalue())
        self.assertIn("8x8", buf.getvalue())

    def test_no_command(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main([]), 0)

if __name__ == '__main__':
    unittest.main()
