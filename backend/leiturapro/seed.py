from __future__ import annotations
import logging

from .models import (
	AssessmentCreate,
	AssessmentCriteria,
	ComprehensionCriteria,
	FluencyCriteria,
	MathCriteria,
	SchoolClassCreate,
	StudentCreate,
)
from .store import DomainStore


logger = logging.getLogger(__name__)

DEMO_CLASSES = [
	SchoolClassCreate(name="Turma A", grade_level="2º Ano Fundamental"),
	SchoolClassCreate(name="Turma B", grade_level="3º Ano Fundamental"),
]

# (name, class index, reading level)
DEMO_STUDENTS = [
	("Ana Souza", 0, "Iniciante"),
	("Bruno Lima", 0, "Em Desenvolvimento"),
	("Carla Mendes", 1, "Fluente"),
	("Diego Alves", 1, "Pré-leitor"),
]

# (student index, date, wpm, accuracy, comprehension, math score)
DEMO_ASSESSMENTS = [
	(0, "2024-03-01", 38, 78, 6, 5),
	(0, "2024-04-01", 45, 84, 7, 6),
	(1, "2024-03-01", 55, 88, 7, None),
	(1, "2024-04-02", 62, 91, 8, 7),
	(2, "2024-03-04", 85, 95, 9, 8),
	(3, "2024-03-04", 12, 60, 4, 3),
]


def seed_demo_data(store: DomainStore) -> None:
	for cls in DEMO_CLASSES:
		store.add_class(cls)
	classes = store.snapshot().classes
	for name, class_idx, level in DEMO_STUDENTS:
		store.add_student(StudentCreate(name=name, class_id=classes[class_idx].id, reading_level=level))
	students = store.snapshot().students
	for student_idx, day, wpm, accuracy, comprehension, math_score in DEMO_ASSESSMENTS:
		criteria = AssessmentCriteria(
			fluency=FluencyCriteria(pace=wpm >= 40, intonation=accuracy >= 85, punctuation=accuracy >= 90, word_recognition=True),
			comprehension=ComprehensionCriteria(main_idea=True, details=comprehension >= 7, inference=comprehension >= 8),
			math=MathCriteria(number_sense=True, addition=True) if math_score is not None else None,
		)
		store.add_assessment(AssessmentCreate(
			student_id=students[student_idx].id,
			date=day,
			wpm=wpm,
			accuracy=accuracy,
			comprehension=comprehension,
			math_score=math_score,
			criteria=criteria,
		))
	logger.info("seeded %d classes, %d students, %d assessments", len(DEMO_CLASSES), len(DEMO_STUDENTS), len(DEMO_ASSESSMENTS))
