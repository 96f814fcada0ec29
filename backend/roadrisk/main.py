from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import router as api_router
from .config import CORS_ORIGINS, SEED_ON_START
from .db_models import SessionLocal, init_db
from .logging_setup import logger
from .seed import seed_zones

app = FastAPI(title="RoadRisk - API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)
app.include_router(api_router)


@app.on_event("startup")
def _startup():
    init_db()
    if not SEED_ON_START:
        logger.info("[main] Seeding disabled, skipping")
        return
    db = SessionLocal()
    try:
        seed_zones(db)
    finally:
        db.close()


@app.get("/")
def root():
    return {"status": "roadrisk backend running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("backend.roadrisk.main:app", host="0.0.0.0", port=8000, reload=True)
