from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from forward_verifier.api.claim_api import router as claim_router
from forward_verifier.core.config import BACKEND_HOST, BACKEND_PORT, FRONTEND_URL
from forward_verifier.core.errors import FactCheckError
from forward_verifier.core.gemini_client import create_client
from forward_verifier.services.summary_service import SummaryService
from forward_verifier.services.transcription_service import TranscriptionService
from forward_verifier.services.verification_pipeline import VerificationPipeline
from forward_verifier.services.verification_service import VerificationService


def build_pipeline(client) -> VerificationPipeline:
    return VerificationPipeline(
        verifier=VerificationService(client),
        summarizer=SummaryService(client),
        transcriber=TranscriptionService(client),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One Gemini client for the whole process
    if getattr(app.state, "pipeline", None) is None:
        app.state.pipeline = build_pipeline(create_client())
    yield


app = FastAPI(lifespan=lifespan)

# Configure CORS - Allow both local development and production frontend
allowed_origins = [
    FRONTEND_URL,  # From .env file
    "http://localhost:3000",  # Local development
]

# Remove duplicates and None values
allowed_origins = list(filter(None, set(allowed_origins)))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FactCheckError)
async def fact_check_error_handler(request: Request, exc: FactCheckError):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.user_message,
            "retryable": exc.retryable,
        },
    )


app.include_router(claim_router, prefix="/api/claims", tags=["Fact Checking"])


@app.get("/")
async def root():
    return {"message": "Fake-Forward Verifier API is running. Use /api/claims endpoint."}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=BACKEND_HOST, port=BACKEND_PORT)
