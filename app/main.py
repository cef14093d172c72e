# app/main.py
import logging

from fastapi import FastAPI

from .catalog import catalog_router
from .config import get_settings


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description=(
        "Plant catalogue backed by the Perenual species API: paced, "
        "paginated category listings and normalized plant details."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


# 🔹 Basic route for a quick liveness check
@app.get("/")
def health_check():
    return {"status": "ok", "message": "Plant lexicon live 🌿"}
