from fastapi import APIRouter, Depends

from ..dashboard import DashboardData, build_dashboard
from ..store import DomainStore, get_store
from ..views import ALL_CLASSES, ViewFilter
from .auth import User, get_current_user


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardData)
async def get_dashboard(
	class_id: str = ALL_CLASSES,
	search: str = "",
	user: User = Depends(get_current_user),
	store: DomainStore = Depends(get_store),
):
	return build_dashboard(store.snapshot(), ViewFilter(class_id=class_id, search=search))
