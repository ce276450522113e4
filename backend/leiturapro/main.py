import logging

from fastapi import FastAPI

from .seed import seed_demo_data
from .settings import settings
from .store import store
from .routers import auth
from .routers import classes
from .routers import students
from .routers import assessments
from .routers import dashboard
from .routers import navigation
from .routers import reports

logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="LeituraPro API")
app.include_router(auth.router)
app.include_router(classes.router)
app.include_router(students.router)
app.include_router(assessments.router)
app.include_router(dashboard.router)
app.include_router(navigation.router)
app.include_router(reports.router)

@app.get("/info")
def root():
	return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}

@app.on_event("startup")
async def startup_event():
	if settings.seed_demo_data and not store.snapshot().students:
		seed_demo_data(store)
	if not (settings.seed_username and settings.seed_password_plain):
		logger.warning("SEED_USERNAME/SEED_PASSWORD not set; no teacher account can log in")
	logger.info("LeituraPro API started (gemini configured: %s)", bool(settings.gemini_api_key))
