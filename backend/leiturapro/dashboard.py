from __future__ import annotations
from typing import List

from pydantic import BaseModel

from .distribution import LevelCount, reading_level_distribution
from .store import Snapshot
from .trends import TrendPoint, fluency_trend
from .views import DashboardStats, ViewFilter, cached_derive_view


class DashboardData(BaseModel):
	class_id: str
	search: str
	stats: DashboardStats
	trend: List[TrendPoint]
	levels: List[LevelCount]


def build_dashboard(snapshot: Snapshot, view_filter: ViewFilter) -> DashboardData:
	view = cached_derive_view(snapshot, view_filter)
	return DashboardData(
		class_id=view_filter.class_id,
		search=view_filter.search,
		stats=view.stats,
		trend=fluency_trend(view.assessments),
		levels=reading_level_distribution(view.students),
	)
