"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import simulations
from src.config import settings

app = FastAPI(
    title="Credit Simulator",
    description="Mortgage credit simulation: French amortization with grace periods",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(simulations.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
