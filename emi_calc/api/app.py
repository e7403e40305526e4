"""FastAPI application entry point."""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from emi_calc.api.routes import calculator, rates
from emi_calc.config import settings

app = FastAPI(
    title="EMI Calculator",
    description="Loan installment and amortization schedule with currency display",
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

app.include_router(calculator.router)
app.include_router(rates.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    logging.basicConfig(level=settings.log_level)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
