"""Tests for the Snake module."""

import pytest

from snake_arcade.snake import Direction, Snake


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT

    def test_vectors(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.RIGHT.value == (1, 0)

    def test_from_name(self):
        assert Direction.from_name("up") is Direction.UP
        assert Direction.from_name("Left") is Direction.LEFT

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown direction"):
            Direction.from_name("sideways")


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(5, 5)
        assert snake.head == (5, 5)
        assert len(snake) == 3
        assert snake.direction == Direction.RIGHT

    def test_body_extends_opposite_to_direction(self):
        snake = Snake(11, 12, Direction.RIGHT, length=3)
        assert list(snake.body) == [(11, 12), (10, 12), (9, 12)]

    def test_body_extends_down_when_moving_up(self):
        snake = Snake(5, 5, Direction.UP, length=3)
        assert list(snake.body) == [(5, 5), (5, 6), (5, 7)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(0, 0, length=0)

    def test_from_cells(self):
        snake = Snake.from_cells([(2, 2), (2, 3), (3, 3)], Direction.UP)
        assert snake.head == (2, 2)
        assert snake.tail == (3, 3)
        assert snake.direction == Direction.UP

    def test_from_cells_empty(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake.from_cells([])


class TestSnakeMovement:
    def test_next_head(self):
        snake = Snake(5, 5, Direction.RIGHT)
        assert snake.next_head() == (6, 5)

    def test_advance_without_growth(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        vacated = snake.advance((6, 5))
        assert snake.head == (6, 5)
        assert len(snake) == 3
        assert vacated == (3, 5)

    def test_advance_with_growth(self):
        snake = Snake(5, 5, Direction.RIGHT, length=3)
        vacated = snake.advance((6, 5), grow=True)
        assert snake.head == (6, 5)
        assert len(snake) == 4
        assert vacated is None
