from __future__ import annotations
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ..models import SchoolClass, SchoolClassCreate
from ..store import DomainStore, get_store
from ..views import students_per_class
from .auth import User, get_current_user


router = APIRouter(prefix="/classes", tags=["classes"])


def _require_class(store: DomainStore, class_id: str) -> SchoolClass:
	cls = store.get_class(class_id)
	if cls is None:
		raise HTTPException(status_code=404, detail="Class not found")
	return cls


@router.get("")
async def list_classes(user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)) -> List[Dict[str, Any]]:
	snapshot = store.snapshot()
	counts = students_per_class(snapshot)
	return [{**c.model_dump(), "student_count": counts.get(c.id, 0)} for c in snapshot.classes]


@router.post("", status_code=201, response_model=SchoolClass)
async def add_class(req: SchoolClassCreate, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	snapshot = store.add_class(req)
	return snapshot.classes[-1]


@router.put("/{class_id}", response_model=SchoolClass)
async def update_class(class_id: str, req: SchoolClassCreate, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	_require_class(store, class_id)
	updated = SchoolClass(id=class_id, **req.model_dump())
	store.update_class(updated)
	return updated


@router.delete("/{class_id}")
async def delete_class(class_id: str, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	_require_class(store, class_id)
	unassigned = students_per_class(store.snapshot()).get(class_id, 0)
	store.delete_class(class_id)
	return {"ok": True, "unassigned_students": unassigned}
