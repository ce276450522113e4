from __future__ import annotations
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict

from .models import Assessment, Student
from .store import Snapshot


ALL_CLASSES = "all"


def round_half_up(value: float) -> int:
	# Python's round() is banker's rounding; dashboards expect 2.5 -> 3
	return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ViewFilter:
	class_id: str = ALL_CLASSES
	search: str = ""

	@property
	def any_class(self) -> bool:
		return self.class_id in (ALL_CLASSES, "")


class DashboardStats(BaseModel):
	model_config = ConfigDict(frozen=True)

	student_count: int
	assessment_count: int
	avg_wpm: int
	avg_accuracy: int


@dataclass(frozen=True)
class DerivedView:
	students: Tuple[Student, ...]
	assessments: Tuple[Assessment, ...]
	stats: DashboardStats


def filter_students(students: Iterable[Student], view_filter: ViewFilter) -> Tuple[Student, ...]:
	needle = view_filter.search.casefold()
	return tuple(
		s for s in students
		if (view_filter.any_class or s.class_id == view_filter.class_id)
		and needle in s.name.casefold()
	)


def filter_assessments(assessments: Iterable[Assessment], students: Iterable[Student]) -> Tuple[Assessment, ...]:
	student_ids = {s.id for s in students}
	return tuple(a for a in assessments if a.student_id in student_ids)


def compute_stats(students: Tuple[Student, ...], assessments: Tuple[Assessment, ...]) -> DashboardStats:
	count = len(assessments)
	if count == 0:
		return DashboardStats(student_count=len(students), assessment_count=0, avg_wpm=0, avg_accuracy=0)
	wpm_total = sum(a.wpm for a in assessments)
	accuracy_total = sum(a.accuracy for a in assessments)
	return DashboardStats(
		student_count=len(students),
		assessment_count=count,
		avg_wpm=round_half_up(wpm_total / count),
		avg_accuracy=round_half_up(accuracy_total / count),
	)


def derive_view(snapshot: Snapshot, view_filter: ViewFilter) -> DerivedView:
	students = filter_students(snapshot.students, view_filter)
	assessments = filter_assessments(snapshot.assessments, students)
	return DerivedView(students=students, assessments=assessments, stats=compute_stats(students, assessments))


@lru_cache(maxsize=32)
def cached_derive_view(snapshot: Snapshot, view_filter: ViewFilter) -> DerivedView:
	"""Memoized derive_view; a new snapshot or filter is a cache miss."""
	return derive_view(snapshot, view_filter)


def students_per_class(snapshot: Snapshot) -> dict:
	counts: dict = {}
	for s in snapshot.students:
		if s.class_id:
			counts[s.class_id] = counts.get(s.class_id, 0) + 1
	return counts


def student_history(snapshot: Snapshot, student_id: str) -> List[Assessment]:
	"""All assessments of one student, oldest first."""
	return sorted((a for a in snapshot.assessments if a.student_id == student_id), key=lambda a: a.date)
