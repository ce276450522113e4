from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..gemini_client import GeminiClient, GeminiNotConfigured
from ..models import ReadingMaterial
from ..reports import ReportGenerationError, enrich_student, generate_reading_material, generate_student_analysis
from ..settings import settings
from ..store import DomainStore, get_store
from .auth import User, get_current_user


router = APIRouter(prefix="/reports", tags=["reports"])


class ReadingMaterialRequest(BaseModel):
	level: str = Field(default="2º Ano Fundamental")
	topic: str = Field(min_length=1)


class AnalysisResponse(BaseModel):
	student_id: str
	report: str


async def get_gemini_client():
	try:
		client = GeminiClient()
	except GeminiNotConfigured as e:
		raise HTTPException(status_code=503, detail=str(e))
	try:
		yield client
	finally:
		await client.aclose()


@router.post("/students/{student_id}/analysis", response_model=AnalysisResponse)
async def student_analysis(
	student_id: str,
	user: User = Depends(get_current_user),
	store: DomainStore = Depends(get_store),
	client: GeminiClient = Depends(get_gemini_client),
):
	snapshot = store.snapshot()
	student = store.get_student(student_id)
	if student is None:
		raise HTTPException(status_code=404, detail="Student not found")
	report = await generate_student_analysis(
		client,
		enrich_student(student, snapshot.classes),
		snapshot.assessments,
		limit=settings.report_history_limit,
	)
	return AnalysisResponse(student_id=student_id, report=report)


@router.post("/reading-material", response_model=ReadingMaterial)
async def reading_material(
	req: ReadingMaterialRequest,
	user: User = Depends(get_current_user),
	client: GeminiClient = Depends(get_gemini_client),
):
	try:
		return await generate_reading_material(client, req.level, req.topic)
	except ReportGenerationError as e:
		raise HTTPException(status_code=502, detail=str(e))
