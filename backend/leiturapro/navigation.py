from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel

from .dashboard import build_dashboard
from .store import DomainStore, Snapshot
from .views import ALL_CLASSES, ViewFilter, cached_derive_view, student_history, students_per_class


logger = logging.getLogger(__name__)


class ViewState(str, Enum):
	DASHBOARD = "dashboard"
	CLASSES = "classes"
	STUDENTS = "students"
	STUDENT_HISTORY = "student_history"
	ASSESSMENT = "assessment"


# Store mutators / transitions each view may trigger
VIEW_ACTIONS: Dict[ViewState, List[str]] = {
	ViewState.DASHBOARD: [],
	ViewState.CLASSES: ["add_class", "update_class", "delete_class", "view_class_students"],
	ViewState.STUDENTS: ["add_student", "update_student", "delete_student", "view_history", "generate_report"],
	ViewState.STUDENT_HISTORY: ["back_to_students"],
	ViewState.ASSESSMENT: ["add_assessment", "cancel_assessment"],
}


class InvalidTransition(RuntimeError):
	pass


class Screen(BaseModel):
	view: ViewState
	data: Dict[str, Any]
	actions: List[str]


class NavigationController:
	def __init__(self) -> None:
		self.current_view = ViewState.DASHBOARD
		self.selected_class_id = ""
		self.selected_student_id = ""

	def navigate(self, view: ViewState) -> ViewState:
		"""Primary-menu navigation; drops selections the target view does not use."""
		self.current_view = view
		if view != ViewState.STUDENTS:
			self.selected_class_id = ""
		if view != ViewState.STUDENT_HISTORY:
			self.selected_student_id = ""
		return self.current_view

	def view_class_students(self, class_id: str) -> ViewState:
		self.selected_class_id = class_id
		self.current_view = ViewState.STUDENTS
		return self.current_view

	def view_history(self, student_id: str) -> ViewState:
		self.selected_student_id = student_id
		self.current_view = ViewState.STUDENT_HISTORY
		return self.current_view

	def back_to_students(self) -> ViewState:
		self._require(ViewState.STUDENT_HISTORY, "back_to_students")
		self.current_view = ViewState.STUDENTS
		return self.current_view

	def assessment_saved(self) -> ViewState:
		# A save made outside the assessment form leaves navigation alone
		if self.current_view == ViewState.ASSESSMENT:
			self.current_view = ViewState.DASHBOARD
		return self.current_view

	def cancel_assessment(self) -> ViewState:
		self._require(ViewState.ASSESSMENT, "cancel_assessment")
		self.current_view = ViewState.DASHBOARD
		return self.current_view

	def _require(self, view: ViewState, action: str) -> None:
		if self.current_view != view:
			raise InvalidTransition(f"{action} is not available from {self.current_view.value}")

	def screen(self, store: DomainStore) -> Screen:
		snapshot = store.snapshot()
		if self.current_view == ViewState.STUDENT_HISTORY and store.get_student(self.selected_student_id) is None:
			logger.info("student %r no longer exists; falling back to dashboard", self.selected_student_id)
			self.current_view = ViewState.DASHBOARD
			self.selected_student_id = ""
		view = self.current_view
		return Screen(view=view, data=self._data_for(view, store, snapshot), actions=VIEW_ACTIONS[view])

	def _data_for(self, view: ViewState, store: DomainStore, snapshot: Snapshot) -> Dict[str, Any]:
		if view == ViewState.CLASSES:
			return {"classes": list(snapshot.classes), "student_counts": students_per_class(snapshot)}
		if view == ViewState.STUDENTS:
			derived = cached_derive_view(snapshot, ViewFilter(class_id=self.selected_class_id or ALL_CLASSES))
			assessment_counts: Dict[str, int] = {}
			for a in snapshot.assessments:
				assessment_counts[a.student_id] = assessment_counts.get(a.student_id, 0) + 1
			return {
				"class_id": self.selected_class_id,
				"students": list(derived.students),
				"classes": list(snapshot.classes),
				"assessment_counts": {s.id: assessment_counts.get(s.id, 0) for s in derived.students},
			}
		if view == ViewState.STUDENT_HISTORY:
			return {
				"student": store.get_student(self.selected_student_id),
				"assessments": student_history(snapshot, self.selected_student_id),
			}
		if view == ViewState.ASSESSMENT:
			return {"students": list(snapshot.students), "classes": list(snapshot.classes)}
		return {
			"classes": list(snapshot.classes),
			"dashboard": build_dashboard(snapshot, ViewFilter()),
		}


_navigators: Dict[str, NavigationController] = {}


def get_navigator(username: str) -> NavigationController:
	nav = _navigators.get(username)
	if nav is None:
		nav = NavigationController()
		_navigators[username] = nav
	return nav
