from __future__ import annotations
from collections import Counter
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict

from .models import READING_LEVELS, Student


class LevelCount(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	count: int


def _level_order(level: str):
	# Known levels in progression order, anything else alphabetically after them
	if level in READING_LEVELS:
		return (0, READING_LEVELS.index(level), "")
	return (1, 0, level)


def reading_level_distribution(students: Iterable[Student]) -> List[LevelCount]:
	counts = Counter(s.reading_level for s in students)
	return [LevelCount(name=level, count=counts[level]) for level in sorted(counts, key=_level_order)]
