from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from annotator.analysis.lexicon import init_shared_lexicon, shared_lexicon
from annotator.analysis.router import router as analysis_router
from annotator.config import settings
from annotator.exception_handlers import register_exception_handlers
from annotator.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_shared_lexicon()
    yield


app = FastAPI(
    title="Post Annotator",
    description="Sentiment, context, safety and topic annotations for posts and comments",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(analysis_router, prefix="/api/v1/analysis", tags=["analysis"])


@app.get("/api/v1/health")
async def health():
    shared_lexicon()
    return {"status": "healthy"}
