from __future__ import annotations
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..models import Assessment, AssessmentCreate
from ..navigation import get_navigator
from ..store import DomainStore, get_store
from .auth import User, get_current_user


router = APIRouter(prefix="/assessments", tags=["assessments"])

logger = logging.getLogger(__name__)


@router.get("", response_model=List[Assessment])
async def list_assessments(
	student_id: Optional[str] = None,
	user: User = Depends(get_current_user),
	store: DomainStore = Depends(get_store),
):
	assessments = store.snapshot().assessments
	if student_id is not None:
		return [a for a in assessments if a.student_id == student_id]
	return list(assessments)


@router.post("", status_code=201, response_model=Assessment)
async def submit_assessment(req: AssessmentCreate, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	if store.get_student(req.student_id) is None:
		raise HTTPException(status_code=400, detail=f"Unknown student_id {req.student_id!r}")
	snapshot = store.add_assessment(req)
	saved = snapshot.assessments[-1]
	logger.info("assessment %s saved for student %s (%d wpm)", saved.id, saved.student_id, saved.wpm)
	# Saving returns the teacher to the dashboard
	get_navigator(user.username).assessment_saved()
	return saved
