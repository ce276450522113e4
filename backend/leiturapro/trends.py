from __future__ import annotations
from datetime import date
from typing import Dict, Iterable, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict

from .models import Assessment, normalize_date_key
from .views import round_half_up


# pt-BR day/month, no year
DISPLAY_DATE_FORMAT = "%d/%m"


class TrendPoint(BaseModel):
	model_config = ConfigDict(frozen=True)

	date: str
	avg_wpm: int


def display_date(date_key: str) -> str:
	# Build from explicit calendar fields; never parse as a UTC timestamp
	year, month, day = (int(part) for part in date_key.split("-"))
	return date(year, month, day).strftime(DISPLAY_DATE_FORMAT)


def iter_fluency_trend(assessments: Iterable[Assessment]) -> Iterator[TrendPoint]:
	"""Yield the average WPM per assessment day in chronological order."""
	grouped: Dict[str, Tuple[int, int]] = {}
	for a in assessments:
		key = normalize_date_key(a.date)
		wpm_sum, count = grouped.get(key, (0, 0))
		grouped[key] = (wpm_sum + a.wpm, count + 1)
	# Zero-padded ISO keys sort lexicographically in calendar order
	for key in sorted(grouped):
		wpm_sum, count = grouped[key]
		yield TrendPoint(date=display_date(key), avg_wpm=round_half_up(wpm_sum / count))


def fluency_trend(assessments: Iterable[Assessment]) -> List[TrendPoint]:
	return list(iter_fluency_trend(assessments))
