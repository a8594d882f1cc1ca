from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import calculator, shapes

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("fancycalc")

# Create grade tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Fancy-shape diamond proportion normalization and performance grading",
    version="6.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculator.router, prefix="/api")
app.include_router(shapes.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "fancycalc"}


@app.on_event("startup")
def auto_seed():
    """Load grade tables from the seed file on first run."""
    from .database import SessionLocal
    from .seed import seed_from_file
    db = SessionLocal()
    try:
        added = seed_from_file(db, settings.GRADE_SEED_PATH)
        if added:
            logger.info("Seeded %d grade rows from %s", added, settings.GRADE_SEED_PATH)
    except Exception as e:
        # A bad seed file must not keep the calculator from starting
        logger.warning(f"Grade seed warning: {e}")
    finally:
        db.close()
