import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.chatbot import router as chatbot_router
from app.api.policy import router as policy_router
from app.core.config import get_settings
from app.core.errors import PolicyConfigurationError
from app.core.log import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Sports Benefits Claim Checker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PolicyConfigurationError)
async def policy_configuration_error(request: Request, exc: PolicyConfigurationError):
    logger.error("Policy configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": f"Policy configuration error: {exc}"})


@app.get("/")
def root():
    return {"status": "ok", "message": "Backend running. Visit /docs for API."}


app.include_router(chatbot_router, prefix="/api", tags=["chatbot"])
app.include_router(policy_router, prefix="/api", tags=["policy"])
