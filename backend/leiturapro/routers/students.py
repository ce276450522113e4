from __future__ import annotations
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..models import Student, StudentCreate
from ..reports import enrich_student
from ..store import DomainStore, get_store
from ..views import ALL_CLASSES, ViewFilter, filter_students, student_history
from .auth import User, get_current_user


router = APIRouter(prefix="/students", tags=["students"])


def _require_student(store: DomainStore, student_id: str) -> Student:
	student = store.get_student(student_id)
	if student is None:
		raise HTTPException(status_code=404, detail="Student not found")
	return student


def _check_class(store: DomainStore, class_id: str) -> None:
	if class_id and store.get_class(class_id) is None:
		raise HTTPException(status_code=400, detail=f"Unknown class_id {class_id!r}")


@router.get("", response_model=List[Student])
async def list_students(
	class_id: str = ALL_CLASSES,
	search: str = "",
	user: User = Depends(get_current_user),
	store: DomainStore = Depends(get_store),
):
	return list(filter_students(store.snapshot().students, ViewFilter(class_id=class_id, search=search)))


@router.post("", status_code=201, response_model=Student)
async def add_student(req: StudentCreate, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	_check_class(store, req.class_id)
	snapshot = store.add_student(req)
	return snapshot.students[-1]


@router.put("/{student_id}", response_model=Student)
async def update_student(student_id: str, req: StudentCreate, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	current = _require_student(store, student_id)
	_check_class(store, req.class_id)
	fields = req.model_dump()
	if not fields["avatar_url"].strip():
		fields["avatar_url"] = current.avatar_url
	updated = Student(id=student_id, **fields)
	store.update_student(updated)
	return updated


@router.delete("/{student_id}")
async def delete_student(student_id: str, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	_require_student(store, student_id)
	store.delete_student(student_id)
	return {"ok": True}


@router.get("/{student_id}/history")
async def get_history(student_id: str, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	snapshot = store.snapshot()
	student = _require_student(store, student_id)
	return {
		"student": enrich_student(student, snapshot.classes),
		"assessments": student_history(snapshot, student_id),
	}
