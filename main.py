import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.engine import LOG_LEVEL
from src.routers import belief as belief_router

# Configure logging VERY early
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(title="Belief Profiling & Opponent Matching Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(belief_router.router, prefix="/api/v1", tags=["beliefs"])

@app.get("/", tags=["Health Check"])
async def read_root():
    """
    Root endpoint for basic health check.
    """
    return {"status": "ok", "message": "Belief engine is running."}

@app.get("/health", tags=["Health Check"])
async def health_check():
    """
    Reports whether the survey definition can be loaded.
    """
    try:
        engine = belief_router.get_belief_engine()
    except ValueError as e:
        logger.error(f"Survey definition failed to load: {e}", exc_info=True)
        return {"status": "degraded", "survey_definition": str(e)}
    return {"status": "ok", "survey_definition": engine.definition.version, "questions": len(engine.definition.questions)}

# --- Run with Uvicorn (for local development) ---
if __name__ == "__main__":
    import uvicorn
    # Better to run with `uvicorn main:app --reload` from the project root directory
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
