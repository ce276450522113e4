from __future__ import annotations
import re
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Progression order; also the display order of the level distribution chart
READING_LEVELS: List[str] = ["Pré-leitor", "Iniciante", "Em Desenvolvimento", "Fluente", "Avançado"]
DEFAULT_READING_LEVEL = "Iniciante"

_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def normalize_date_key(value: Any) -> str:
	"""Return `value` as a zero-padded ISO day (YYYY-MM-DD).

	Accepts `date` objects and strings with unpadded month/day such as
	"2024-3-1". Anything that is not a real calendar day raises ValueError.
	"""
	if isinstance(value, datetime):
		value = value.date()
	if isinstance(value, date):
		return value.isoformat()
	match = _DATE_RE.match(str(value).strip())
	if not match:
		raise ValueError(f"date must be in YYYY-MM-DD form, got {value!r}")
	year, month, day = (int(part) for part in match.groups())
	return date(year, month, day).isoformat()


class _Frozen(BaseModel):
	model_config = ConfigDict(frozen=True)


class FluencyCriteria(_Frozen):
	pace: bool = False
	intonation: bool = False
	punctuation: bool = False
	word_recognition: bool = False


class ComprehensionCriteria(_Frozen):
	main_idea: bool = False
	details: bool = False
	inference: bool = False
	vocabulary: bool = False
	retelling: bool = False


class MathCriteria(_Frozen):
	number_sense: bool = False
	addition: bool = False
	subtraction: bool = False
	problem_solving: bool = False
	patterns: bool = False


class AssessmentCriteria(_Frozen):
	fluency: FluencyCriteria = Field(default_factory=FluencyCriteria)
	comprehension: ComprehensionCriteria = Field(default_factory=ComprehensionCriteria)
	math: Optional[MathCriteria] = None


class SchoolClassCreate(_Frozen):
	name: str = Field(min_length=1)
	grade_level: str = ""


class SchoolClass(SchoolClassCreate):
	id: str


class StudentCreate(_Frozen):
	name: str = Field(min_length=1)
	# "" means the student is not assigned to any class
	class_id: str = ""
	reading_level: str = DEFAULT_READING_LEVEL
	avatar_url: str = ""

	@field_validator("class_id", mode="before")
	@classmethod
	def _none_is_unassigned(cls, value: Any) -> Any:
		return "" if value is None else value


class Student(StudentCreate):
	id: str


class AssessmentCreate(_Frozen):
	student_id: str
	date: str
	wpm: int = Field(ge=0)
	accuracy: float = Field(ge=0, le=100)
	comprehension: float = Field(default=0, ge=0)
	math_score: Optional[float] = Field(default=None, ge=0)
	criteria: Optional[AssessmentCriteria] = None
	notes: str = ""

	@field_validator("date", mode="before")
	@classmethod
	def _iso_day(cls, value: Any) -> str:
		return normalize_date_key(value)


class Assessment(AssessmentCreate):
	id: str


class ReadingMaterial(BaseModel):
	title: str
	content: str
	questions: List[str]
	level: str = ""
