import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import JSONResponse

# Load env first so the resolver sees API keys
load_dotenv(".env", override=False)

from .feedback import generate_feedback
from .llm import resolve_config_from_env
from .models import AppraisalData, FeedbackResponse
from .utils.logger import setup_logger

logger = setup_logger(level=os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(title="Appraisal Feedback", version="0.1.0")


@app.get("/")
async def root():
    return {"message": "Appraisal feedback service is running. Use POST /api/generate-feedback."}


@app.get("/api/provider")
def current_provider():
    config = resolve_config_from_env()
    if config is None:
        return {"provider": None}
    return config.describe()


# Plain `def` so FastAPI runs the blocking provider call in its threadpool
@app.post("/api/generate-feedback", response_model=FeedbackResponse, response_model_exclude_none=True)
def generate_feedback_endpoint(data: AppraisalData):
    try:
        result = generate_feedback(data)
    except Exception as exc:
        logger.exception("Error generating feedback")
        body = FeedbackResponse(success=False, feedback="", error=str(exc) or "Unknown error occurred")
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, exclude_none=True))

    logger.info("[feedback] employee=%s source=%s provider=%s", data.employee_id, result.source, result.provider)
    return FeedbackResponse(success=True, feedback=result.feedback, source=result.source)
