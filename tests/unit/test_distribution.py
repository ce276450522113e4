"""Unit tests for the reading-level distribution."""

from leiturapro.distribution import LevelCount, reading_level_distribution
from leiturapro.models import Student


def _s(i, level):
	return Student(id=f"s{i}", name=f"Aluno {i}", reading_level=level)


def test_counts_per_level_in_progression_order():
	students = [_s(1, "Fluente"), _s(2, "Iniciante"), _s(3, "Fluente"), _s(4, "Pré-leitor")]

	assert reading_level_distribution(students) == [
		LevelCount(name="Pré-leitor", count=1),
		LevelCount(name="Iniciante", count=1),
		LevelCount(name="Fluente", count=2),
	]


def test_unknown_levels_follow_alphabetically():
	students = [_s(1, "Zeta"), _s(2, "Avançado"), _s(3, "Alfa")]
	assert [lc.name for lc in reading_level_distribution(students)] == ["Avançado", "Alfa", "Zeta"]


def test_order_independent_of_input_order():
	students = [_s(1, "Fluente"), _s(2, "Iniciante"), _s(3, "Em Desenvolvimento")]
	assert reading_level_distribution(students) == reading_level_distribution(list(reversed(students)))


def test_empty():
	assert reading_level_distribution([]) == []
