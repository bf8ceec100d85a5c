import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import build_engine, build_sessionmaker
from app.exceptions import register_exception_handlers
from app.middleware import TimingMiddleware
from app.routers import api, articles, comments, topics, users
from app.schemas import HealthResponse

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one engine per process, handed to requests via app.state
    engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    logger.info("Database engine ready (%s)", settings.APP_ENV)
    try:
        yield
    finally:
        # Shutdown
        await engine.dispose()
        logger.info("Database engine disposed")

app = FastAPI(
    title="News API",
    description="Topics, articles, comments and users of a news aggregator",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(api.router)
app.include_router(topics.router)
app.include_router(articles.router)
app.include_router(comments.router)
app.include_router(users.router)

@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "healthy", "version": app.version}
