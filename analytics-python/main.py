"""
Workout Tracker Analytics Service
FastAPI application serving workout consistency and performance statistics

Run with: uvicorn main:app --reload --port 8000
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Import routers
from routers import stats_router, consistency_router, performance_router, targets_router
from services import UnknownPeriodError

# Create FastAPI app
app = FastAPI(
    title="Workout Tracker Analytics",
    description="""
    ## Workout Log Analytics

    Every statistic is recomputed from the workout log on request:

    ### Stats
    - **Training Percentage**: Share of days trained this week/month/year
    - **Streaks**: Current and longest run of consecutive training days
    - **Yearly / Monthly**: Training percentage history

    ### Consistency
    - **Rest Intervals**: Median, range and distribution of rest days
    - **Pattern**: Stable, Variable or Irregular training rhythm
    - **Trend**: Whether rests got shorter over the last 4 months
    - **Year Comparison**: This year vs last year

    ### Performance
    - **Set Positions**: Best and average reps per set position
    - **Progression**: When the exercise's best value went up

    ### Targets
    - **Progress**: Sets/reps/duration targets for the current period

    ---

    **Tech Stack**: Python, FastAPI, pandas, NumPy
    """,
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc alternative
)

# Configure CORS to allow requests from frontend and Node API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnknownPeriodError)
async def unknown_period_handler(request: Request, exc: UnknownPeriodError):
    logger.error("Unknown period requested on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the analytics service is running"""
    return {
        "status": "healthy",
        "service": "workout-tracker-analytics",
        "version": "1.0.0"
    }


# Include routers
app.include_router(stats_router)
app.include_router(consistency_router)
app.include_router(performance_router)
app.include_router(targets_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "Workout Tracker Analytics",
        "version": "1.0.0",
        "documentation": "/docs",
        "endpoints": {
            "stats": {
                "overview": "GET /stats/overview",
                "training_percentage": "GET /stats/training-percentage/{period}",
                "yearly": "GET /stats/yearly",
                "monthly": "GET /stats/monthly/{year}",
                "exercise_frequency": "GET /stats/exercise-frequency",
                "category_sets": "GET /stats/category-sets"
            },
            "consistency": {
                "exercise": "GET /consistency/exercises/{exercise_id}",
                "year_comparison": "GET /consistency/exercises/{exercise_id}/year-comparison",
                "categories": "GET /consistency/categories"
            },
            "performance": {
                "positions": "GET /performance/exercises/{exercise_id}/positions",
                "progression": "GET /performance/exercises/{exercise_id}/progression",
                "sessions": "GET /performance/exercises/{exercise_id}/sessions"
            },
            "targets": {
                "progress": "POST /targets/progress"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
