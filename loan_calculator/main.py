import logging
import sys

from fastapi import FastAPI

from loan_calculator.config import APP_TITLE, LOG_FORMAT, LOG_LEVEL
from loan_calculator.routers import calculations

logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)

app = FastAPI(title=APP_TITLE)

app.include_router(calculations.router, prefix="/calculations", tags=["calculations"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
