"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loan_calculator.api.routes import loan
from loan_calculator.config import settings
from loan_calculator.log import setup_logging

setup_logging(settings.log_level)

app = FastAPI(
    title="Loan Calculator",
    description="Fixed-payment loan amortization",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(loan.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
