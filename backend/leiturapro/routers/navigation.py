from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..navigation import InvalidTransition, Screen, ViewState, get_navigator
from ..store import DomainStore, get_store
from .auth import User, get_current_user


router = APIRouter(prefix="/navigation", tags=["navigation"])


class NavigateRequest(BaseModel):
	view: ViewState


class ClassSelection(BaseModel):
	class_id: str


class StudentSelection(BaseModel):
	student_id: str


@router.get("", response_model=Screen)
async def current_screen(user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	return get_navigator(user.username).screen(store)


@router.post("/navigate", response_model=Screen)
async def navigate(req: NavigateRequest, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	nav = get_navigator(user.username)
	nav.navigate(req.view)
	return nav.screen(store)


@router.post("/view-class-students", response_model=Screen)
async def view_class_students(req: ClassSelection, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	nav = get_navigator(user.username)
	nav.view_class_students(req.class_id)
	return nav.screen(store)


@router.post("/view-history", response_model=Screen)
async def view_history(req: StudentSelection, user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	nav = get_navigator(user.username)
	nav.view_history(req.student_id)
	return nav.screen(store)


@router.post("/back", response_model=Screen)
async def back_to_students(user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	nav = get_navigator(user.username)
	try:
		nav.back_to_students()
	except InvalidTransition as e:
		raise HTTPException(status_code=409, detail=str(e))
	return nav.screen(store)


@router.post("/cancel-assessment", response_model=Screen)
async def cancel_assessment(user: User = Depends(get_current_user), store: DomainStore = Depends(get_store)):
	nav = get_navigator(user.username)
	try:
		nav.cancel_assessment()
	except InvalidTransition as e:
		raise HTTPException(status_code=409, detail=str(e))
	return nav.screen(store)
