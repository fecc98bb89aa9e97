import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from walkloop.models.goal import Goal
from walkloop.models.health import HealthMetrics
from walkloop.models.request import RouteRequest
from walkloop.models.response import GoalResolution, RouteResponse
from walkloop.services.health.health_service import HealthMetricsService
from walkloop.services.route_service import RouteService
from walkloop.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Walkloop API",
    description="Closed-loop walking route generation API",
    version=settings.api_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

route_service = RouteService()
# Device health store adapters plug in here
health_metrics_service: Optional[HealthMetricsService] = None


# main api
@app.post("/api/v1/routes/generate", response_model=RouteResponse)
async def generate_routes(request: RouteRequest):
    """Generate walking routes for a start point and goal"""
    try:
        return await route_service.generate_routes(request)
    except Exception as e:
        logger.exception("Route generation failed")
        raise HTTPException(
            status_code=500, detail=f"Route generation failed: {str(e)}"
        )


@app.post("/api/v1/goals/resolve", response_model=GoalResolution)
async def resolve_goal(goal: Goal):
    """Resolve a goal into the target route length in meters"""
    return GoalResolution(
        goal=goal.model_dump(mode="json"),
        target_distance_m=route_service.resolve_target_distance(goal),
    )


@app.get("/api/v1/health/today", response_model=HealthMetrics)
async def today_metrics():
    """Today's steps, walking distance and average walking speed"""
    if health_metrics_service is None:
        raise HTTPException(status_code=503, detail="Health data source not configured")
    return await health_metrics_service.fetch_today()


@app.get("/health")
async def health_check():
    """Health check"""
    return {"status": "healthy", "version": settings.api_version}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
