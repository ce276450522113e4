from __future__ import annotations
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from .gemini_client import GeminiClient
from .models import (
	Assessment,
	ComprehensionCriteria,
	FluencyCriteria,
	MathCriteria,
	ReadingMaterial,
	SchoolClass,
	Student,
)


logger = logging.getLogger(__name__)

ANALYSIS_EMPTY_MESSAGE = "Não foi possível gerar a análise no momento."
ANALYSIS_ERROR_MESSAGE = "Erro ao conectar com a IA."

READING_MATERIAL_SCHEMA: Dict[str, Any] = {
	"type": "OBJECT",
	"properties": {
		"title": {"type": "STRING", "description": "Título do texto de leitura."},
		"content": {"type": "STRING", "description": "O texto completo para o aluno ler."},
		"questions": {
			"type": "ARRAY",
			"items": {"type": "STRING"},
			"description": "Três perguntas de compreensão sobre o texto.",
		},
	},
	"required": ["title", "content", "questions"],
	"propertyOrdering": ["title", "content", "questions"],
}


class ReportGenerationError(RuntimeError):
	pass


class EnrichedStudent(Student):
	grade: str = "N/A"


def enrich_student(student: Student, classes: Iterable[SchoolClass]) -> EnrichedStudent:
	grade = next((c.grade_level for c in classes if c.id == student.class_id), "") or "N/A"
	return EnrichedStudent(**student.model_dump(), grade=grade)


def recent_history(assessments: Iterable[Assessment], student_id: str, limit: int = 3) -> List[Assessment]:
	"""Most recent `limit` assessments of one student, newest first."""
	own = [a for a in assessments if a.student_id == student_id]
	own.sort(key=lambda a: a.date, reverse=True)
	return own[:limit]


def _checked(criteria) -> int:
	return sum(1 for value in criteria.model_dump().values() if value)


def _score(value: Optional[float]) -> str:
	if value is None:
		return "N/A"
	return f"{value:g}"


def summarize_assessment(a: Assessment) -> str:
	details = ""
	if a.criteria is not None:
		c = a.criteria
		math = _checked(c.math) if c.math is not None else 0
		# A math score of 0 is reported as not assessed (M:N/A)
		details = (
			f" | Fluência: {_checked(c.fluency)}/{len(FluencyCriteria.model_fields)},"
			f" Compreensão: {_checked(c.comprehension)}/{len(ComprehensionCriteria.model_fields)},"
			f" Matemática: {math}/{len(MathCriteria.model_fields)}."
			f" Notas: L:{_score(a.comprehension)}, M:{_score(a.math_score or None)}"
		)
	return f"Data: {a.date}, WPM: {a.wpm}, Precisão: {_score(a.accuracy)}%{details}. Obs: {a.notes}"


def build_analysis_prompt(student: EnrichedStudent, history: Iterable[Assessment]) -> str:
	summary = "\n".join(summarize_assessment(a) for a in history)
	return (
		"Atue como um especialista pedagógico multidisciplinar em alfabetização e educação básica.\n"
		"Analise o progresso do aluno abaixo considerando tanto a LEITURA quanto a MATEMÁTICA.\n\n"
		f"Aluno: {student.name}\n"
		f"Série: {student.grade}\n"
		f"Nível de Leitura Atual: {student.reading_level}\n\n"
		"Histórico recente de avaliações:\n"
		f"{summary}\n\n"
		"Forneça um relatório curto e construtivo em Markdown:\n"
		"1. **Desempenho em Leitura**: Síntese da fluência e compreensão.\n"
		"2. **Desenvolvimento Matemático**: Análise das competências numéricas e raciocínio.\n"
		"3. **Sugestões de Intervenção**: 3 atividades práticas que integrem as duas áreas ou foquem na maior dificuldade.\n\n"
		"Seja específico e encorajador."
	)


def build_reading_material_prompt(level: str, topic: str) -> str:
	return (
		f"Gere um material de leitura pedagógico para o nível escolar: {level}.\n"
		f"O tema é: {topic}.\n"
		"O material deve conter um título criativo, um texto adequado para a série e 3 perguntas de compreensão."
	)


async def generate_student_analysis(
	client: GeminiClient,
	student: EnrichedStudent,
	assessments: Iterable[Assessment],
	*,
	limit: int = 3,
) -> str:
	history = recent_history(assessments, student.id, limit)
	prompt = build_analysis_prompt(student, history)
	try:
		text = await client.generate(prompt, thinking_budget=0)
	except (httpx.HTTPError, RuntimeError) as err:
		logger.error("analysis generation failed for student %s: %s", student.id, err)
		return ANALYSIS_ERROR_MESSAGE
	return text.strip() or ANALYSIS_EMPTY_MESSAGE


async def generate_reading_material(client: GeminiClient, level: str, topic: str) -> ReadingMaterial:
	prompt = build_reading_material_prompt(level, topic)
	try:
		raw = await client.generate_json(prompt, READING_MATERIAL_SCHEMA)
	except (httpx.HTTPError, RuntimeError) as err:
		logger.error("reading material generation failed: %s", err)
		raise ReportGenerationError(str(err)) from err
	raw = (raw or "").strip()
	if not raw:
		raise ReportGenerationError("Resposta da IA vazia.")
	try:
		data = json.loads(raw)
		return ReadingMaterial(**data, level=level)
	except (ValueError, TypeError, ValidationError) as err:
		logger.error("invalid reading material payload: %s", raw[:200])
		raise ReportGenerationError("Resposta da IA inválida.") from err
