"""
Test cases for problem generators and number predicates.
"""
import random
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mathiverse.generators import (NUMBER_CHECKERS, NUMBER_TYPES, generate_arithmetic_problem,
                                   generate_math_puzzle_problem, generate_number_picker_problem,
                                   generate_right_box_level, is_fibonacci, is_prime,
                                   random_spawn_position)


SAMPLES = 200


class TestPredicates(unittest.TestCase):
    """Test the numeric type predicates."""

    def test_primes(self):
        primes = [n for n in range(0, 30) if is_prime(n)]
        self.assertEqual(primes, [2, 3, 5, 7, 11, 13, 17, 19, 23, 29])

    def test_fibonacci(self):
        fibs = [n for n in range(0, 100) if is_fibonacci(n)]
        self.assertEqual(fibs, [0, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89])
        self.assertFalse(is_fibonacci(-1))

    def test_parity(self):
        self.assertTrue(NUMBER_CHECKERS["even"](4))
        self.assertFalse(NUMBER_CHECKERS["even"](3))
        self.assertTrue(NUMBER_CHECKERS["odd"](3))


class TestArithmeticGenerator(unittest.TestCase):

    def test_addends_in_range(self):
        rng = random.Random(1)
        for _ in range(SAMPLES):
            problem = generate_arithmetic_problem(rng)
            self.assertTrue(1 <= problem.num1 <= 5)
            self.assertTrue(1 <= problem.num2 <= 5)
            self.assertEqual(problem.answer, problem.num1 + problem.num2)


class TestNumberPickerGenerator(unittest.TestCase):
    """Exactly one number of the requested type among five distinct numbers."""

    def test_exactly_one_match_for_every_type(self):
        rng = random.Random(7)
        for number_type in NUMBER_TYPES:
            check = NUMBER_CHECKERS[number_type]
            for _ in range(SAMPLES):
                problem = generate_number_picker_problem(number_type, rng)
                with self.subTest(type=number_type, numbers=problem.numbers):
                    self.assertEqual(problem.type, number_type)
                    self.assertEqual(len(problem.numbers), 5)
                    self.assertEqual(len(set(problem.numbers)), 5)
                    self.assertTrue(all(1 <= n <= 20 for n in problem.numbers))
                    self.assertEqual([n for n in problem.numbers if check(n)], [problem.correct_answer])

    def test_prime_problem(self):
        problem = generate_number_picker_problem("prime", random.Random(3))
        composites = [n for n in problem.numbers if not is_prime(n)]
        self.assertEqual(len(composites), 4)
        self.assertTrue(is_prime(problem.correct_answer))

    def test_correct_answer_position_varies(self):
        rng = random.Random(11)
        positions = set()
        for _ in range(SAMPLES):
            problem = generate_number_picker_problem("even", rng)
            positions.add(problem.numbers.index(problem.correct_answer))
        self.assertEqual(positions, {0, 1, 2, 3, 4})

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            generate_number_picker_problem("square")


class TestMathPuzzleGenerator(unittest.TestCase):
    """Four distinct non-negative options, one of them correct."""

    def test_options(self):
        rng = random.Random(5)
        for _ in range(SAMPLES):
            problem = generate_math_puzzle_problem(rng)
            with self.subTest(question=problem.question, options=problem.options):
                self.assertEqual(len(problem.options), 4)
                self.assertEqual(len(set(problem.options)), 4)
                self.assertEqual(problem.options.count(problem.correct_answer), 1)
                self.assertTrue(all(o >= 0 for o in problem.options))
                self.assertTrue(all(abs(o - problem.correct_answer) <= 10 for o in problem.options))

    def test_question_matches_answer(self):
        rng = random.Random(9)
        for _ in range(SAMPLES):
            problem = generate_math_puzzle_problem(rng)
            expression = (problem.question.replace("×", "*").replace("÷", "//"))
            if expression.endswith("²"):
                expected = int(expression[:-1]) ** 2
            elif expression.startswith("√"):
                expected = int(int(expression[1:]) ** 0.5)
            else:
                left, op, right = expression.split(" ")
                a, b = int(left), int(right)
                expected = {"+": a + b, "-": a - b, "*": a * b, "//": a // b}[op]
            self.assertEqual(problem.correct_answer, expected, problem.question)


class TestRightBoxGenerator(unittest.TestCase):
    """Distinct values, spawn region and a clearable target."""

    def test_level_shape(self):
        rng = random.Random(13)
        for _ in range(SAMPLES):
            level = generate_right_box_level(6, rng)
            values = [n.value for n in level.numbers]
            self.assertIn(level.target_type, ("even", "odd"))
            self.assertEqual(len(values), 6)
            self.assertEqual(len(set(values)), 6)
            self.assertEqual(len({n.id for n in level.numbers}), 6)
            self.assertTrue(any(NUMBER_CHECKERS[level.target_type](v) for v in values))
            for item in level.numbers:
                self.assertTrue(1 <= item.value <= 50)
                self.assertTrue(0.05 <= item.x <= 0.65)
                self.assertTrue(0.2 <= item.y <= 0.8)
                self.assertFalse(item.is_dragging)
                self.assertTrue(item.id.startswith("num-"))

    def test_single_item_level_is_clearable(self):
        rng = random.Random(17)
        for _ in range(SAMPLES):
            level = generate_right_box_level(1, rng)
            self.assertTrue(NUMBER_CHECKERS[level.target_type](level.numbers[0].value))

    def test_bad_count(self):
        with self.assertRaises(ValueError):
            generate_right_box_level(0)

    def test_spawn_position(self):
        x, y = random_spawn_position(random.Random(2))
        self.assertTrue(0.05 <= x <= 0.65)
        self.assertTrue(0.2 <= y <= 0.8)


if __name__ == '__main__':
    unittest.main()
