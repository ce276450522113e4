from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from .models import (
	Assessment,
	AssessmentCreate,
	SchoolClass,
	SchoolClassCreate,
	Student,
	StudentCreate,
)


logger = logging.getLogger(__name__)


def new_id() -> str:
	return uuid.uuid4().hex


def default_avatar_url() -> str:
	return f"https://picsum.photos/seed/{uuid.uuid4().hex}/200"


@dataclass(frozen=True, eq=False)
class Snapshot:
	"""Immutable view of every collection at one store version.

	Equality and hashing are by identity: each mutation produces a new
	Snapshot, so caches keyed on a snapshot can never go stale.
	"""

	students: Tuple[Student, ...] = ()
	assessments: Tuple[Assessment, ...] = ()
	classes: Tuple[SchoolClass, ...] = ()
	version: int = 0


class DomainStore:
	def __init__(
		self,
		students: Iterable[Student] = (),
		assessments: Iterable[Assessment] = (),
		classes: Iterable[SchoolClass] = (),
	) -> None:
		self._snapshot = Snapshot(tuple(students), tuple(assessments), tuple(classes))

	def snapshot(self) -> Snapshot:
		return self._snapshot

	def _commit(self, **changes) -> Snapshot:
		self._snapshot = replace(self._snapshot, version=self._snapshot.version + 1, **changes)
		return self._snapshot

	# ---- lookups ----

	def get_student(self, student_id: str) -> Optional[Student]:
		return next((s for s in self._snapshot.students if s.id == student_id), None)

	def get_class(self, class_id: str) -> Optional[SchoolClass]:
		return next((c for c in self._snapshot.classes if c.id == class_id), None)

	# ---- classes ----

	def add_class(self, data: SchoolClassCreate) -> Snapshot:
		cls = SchoolClass(id=new_id(), **data.model_dump())
		logger.debug("add class %s (%s)", cls.id, cls.name)
		return self._commit(classes=self._snapshot.classes + (cls,))

	def update_class(self, updated: SchoolClass) -> Snapshot:
		if self.get_class(updated.id) is None:
			return self._snapshot
		logger.debug("update class %s", updated.id)
		return self._commit(classes=tuple(updated if c.id == updated.id else c for c in self._snapshot.classes))

	def delete_class(self, class_id: str) -> Snapshot:
		if self.get_class(class_id) is None:
			return self._snapshot
		# Students stay in the system without a class
		students = tuple(
			s.model_copy(update={"class_id": ""}) if s.class_id == class_id else s
			for s in self._snapshot.students
		)
		logger.debug("delete class %s", class_id)
		return self._commit(
			classes=tuple(c for c in self._snapshot.classes if c.id != class_id),
			students=students,
		)

	# ---- students ----

	def add_student(self, data: StudentCreate) -> Snapshot:
		fields = data.model_dump()
		if not fields["avatar_url"].strip():
			fields["avatar_url"] = default_avatar_url()
		student = Student(id=new_id(), **fields)
		logger.debug("add student %s (%s)", student.id, student.name)
		return self._commit(students=self._snapshot.students + (student,))

	def update_student(self, updated: Student) -> Snapshot:
		if self.get_student(updated.id) is None:
			return self._snapshot
		logger.debug("update student %s", updated.id)
		return self._commit(students=tuple(updated if s.id == updated.id else s for s in self._snapshot.students))

	def delete_student(self, student_id: str) -> Snapshot:
		if self.get_student(student_id) is None:
			return self._snapshot
		# Assessments are kept (orphaned) for history
		logger.debug("delete student %s", student_id)
		return self._commit(students=tuple(s for s in self._snapshot.students if s.id != student_id))

	# ---- assessments ----

	def add_assessment(self, data: AssessmentCreate) -> Snapshot:
		assessment = Assessment(id=new_id(), **data.model_dump())
		logger.debug("add assessment %s for student %s on %s", assessment.id, assessment.student_id, assessment.date)
		return self._commit(assessments=self._snapshot.assessments + (assessment,))


store = DomainStore()


def get_store() -> DomainStore:
	return store
