from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from extreme_search.api.routes import research
from extreme_search.config import settings

app = FastAPI(
    title="Extreme Search",
    description="Autonomous research agent: plan, search, retrieve, aggregate",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(research.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "extreme_search"}
