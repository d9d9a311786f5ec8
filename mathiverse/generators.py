"""
Randomized problem generators for every game.

Generators keep no state between calls. Pass a random.Random to make a
sequence of problems reproducible; otherwise the module-level generator is
used.
"""
import math
import random
import uuid
from typing import Callable, Dict, Optional, Tuple

from .types import (ArithmeticProblem, DraggableNumber, MathPuzzleProblem, NumberPickerProblem,
                    NumberType, Parity, RightBoxLevel)


NUMBER_TYPES: Tuple[NumberType, ...] = ("even", "odd", "prime", "fibonacci")
PICKER_RANGE = (1, 20)
PICKER_SIZE = 5
PUZZLE_OPTIONS = 4
PUZZLE_OPERATIONS = ("ADD", "SUB", "MUL", "DIV", "SQUARE", "ROOT")
BOX_VALUE_RANGE = (1, 50)
SPAWN_X = (0.05, 0.65)
SPAWN_Y = (0.2, 0.8)


def is_even(n: int) -> bool:
    return n % 2 == 0


def is_odd(n: int) -> bool:
    return n % 2 != 0


def is_prime(n: int) -> bool:
    """Trial division up to sqrt(n)."""
    if n <= 1:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


def _is_perfect_square(x: int) -> bool:
    if x < 0:
        return False
    root = math.isqrt(x)
    return root * root == x


def is_fibonacci(n: int) -> bool:
    """n is Fibonacci iff 5n^2 + 4 or 5n^2 - 4 is a perfect square."""
    if n < 0:
        return False
    return _is_perfect_square(5 * n * n + 4) or _is_perfect_square(5 * n * n - 4)


NUMBER_CHECKERS: Dict[str, Callable[[int], bool]] = {
    "even": is_even,
    "odd": is_odd,
    "prime": is_prime,
    "fibonacci": is_fibonacci,
}


def _rng(rng: Optional[random.Random]):
    # the random module exposes the same API as a Random instance
    return rng if rng is not None else random


def generate_arithmetic_problem(rng: Optional[random.Random] = None) -> ArithmeticProblem:
    """Two addends in [1, 5], so the answer can always be shown with ten fingers."""
    r = _rng(rng)
    num1 = r.randint(1, 5)
    num2 = r.randint(1, 5)
    return ArithmeticProblem(num1=num1, num2=num2, answer=num1 + num2)


def generate_number_picker_problem(number_type: NumberType,
                                   rng: Optional[random.Random] = None) -> NumberPickerProblem:
    """
    Five distinct numbers in [1, 20] with exactly one matching number_type.

    Args:
        number_type: One of even, odd, prime, fibonacci
        rng: Optional random generator

    Returns:
        NumberPickerProblem whose numbers are uniformly shuffled

    Raises:
        ValueError: if number_type is unknown
    """
    if number_type not in NUMBER_CHECKERS:
        raise ValueError(f"Unknown number type: {number_type!r}")
    r = _rng(rng)
    check = NUMBER_CHECKERS[number_type]
    low, high = PICKER_RANGE

    matching = [n for n in range(low, high + 1) if check(n)]
    others = [n for n in range(low, high + 1) if not check(n)]
    correct_answer = r.choice(matching)
    numbers = [correct_answer] + r.sample(others, PICKER_SIZE - 1)
    r.shuffle(numbers)

    return NumberPickerProblem(numbers=tuple(numbers), type=number_type, correct_answer=correct_answer)


def random_number_type(rng: Optional[random.Random] = None) -> NumberType:
    return _rng(rng).choice(NUMBER_TYPES)


def _puzzle_question(op: str, r: random.Random) -> Tuple[str, int]:
    if op == "ADD":
        a, b = r.randint(1, 50), r.randint(1, 50)
        return f"{a} + {b}", a + b
    if op == "SUB":
        a = r.randint(10, 59)
        b = r.randrange(a)
        return f"{a} - {b}", a - b
    if op == "MUL":
        a, b = r.randint(2, 13), r.randint(2, 13)
        return f"{a} × {b}", a * b
    if op == "DIV":
        divisor, quotient = r.randint(2, 11), r.randint(2, 11)
        return f"{divisor * quotient} ÷ {divisor}", quotient
    if op == "SQUARE":
        a = r.randint(2, 13)
        return f"{a}²", a * a
    if op == "ROOT":
        root = r.randint(2, 13)
        return f"√{root * root}", root
    raise ValueError(f"Unknown operation: {op!r}")


def generate_math_puzzle_problem(rng: Optional[random.Random] = None) -> MathPuzzleProblem:
    """
    A single-operation question with four options.

    Distractors lie within +/-10 of the answer, are non-negative, distinct
    from each other and from the correct answer.
    """
    r = _rng(rng)
    question, correct_answer = _puzzle_question(r.choice(PUZZLE_OPERATIONS), r)

    candidates = [correct_answer + d for d in range(-10, 11)
                  if d != 0 and correct_answer + d >= 0]
    options = [correct_answer] + r.sample(candidates, PUZZLE_OPTIONS - 1)
    r.shuffle(options)

    return MathPuzzleProblem(question=question, options=tuple(options), correct_answer=correct_answer)


def random_spawn_position(rng: Optional[random.Random] = None) -> Tuple[float, float]:
    """A point in the left spawn region of the sorting field."""
    r = _rng(rng)
    return r.uniform(*SPAWN_X), r.uniform(*SPAWN_Y)


def _item_id(r: random.Random) -> str:
    return f"num-{uuid.UUID(int=r.getrandbits(128)).hex[:9]}"


def generate_right_box_level(count: int = 6, rng: Optional[random.Random] = None) -> RightBoxLevel:
    """
    A sorting level: a target parity and count distinct numbers in [1, 50].

    At least one number has the target parity, so the level can be cleared.

    Raises:
        ValueError: if count is not positive
    """
    if count <= 0:
        raise ValueError(f"Level size must be positive, got {count}")
    r = _rng(rng)
    target_type: Parity = r.choice(("even", "odd"))
    low, high = BOX_VALUE_RANGE

    values = r.sample(range(low, high + 1), count)
    if not any(NUMBER_CHECKERS[target_type](v) for v in values):
        matching = [n for n in range(low, high + 1) if NUMBER_CHECKERS[target_type](n)]
        values[r.randrange(count)] = r.choice(matching)

    numbers = []
    for value in values:
        x, y = random_spawn_position(r)
        numbers.append(DraggableNumber(id=_item_id(r), value=value, x=x, y=y))

    return RightBoxLevel(target_type=target_type, numbers=tuple(numbers))
