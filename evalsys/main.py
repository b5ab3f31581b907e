import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from evalsys.api.evaluations import router as evaluations_router
from evalsys.api.health import router as health_router
from evalsys.api.me import router as me_router
from evalsys.api.settings import router as settings_router
from evalsys.core.config import settings
from evalsys.core.errors import EvalRulesError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Evaluation Rules Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EvalRulesError)
def eval_rules_error_handler(request: Request, exc: EvalRulesError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.to_detail()})


app.include_router(health_router)
app.include_router(me_router)
app.include_router(settings_router)
app.include_router(evaluations_router)
