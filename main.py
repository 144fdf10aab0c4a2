from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os
import logging
from dotenv import load_dotenv

from recommendation.routes import router as recommendation_router

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logging.info("PathFinder API starting")

app = FastAPI(
    title="PathFinder API",
    description="Specialization recommendations for computing undergraduates",
    version="1.0.0",
)

# Cookies carry the student email, so credentials must be allowed
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in FRONTEND_URL.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.include_router(recommendation_router)


@app.get("/", tags=["health"], summary="Service banner")
def root():
    return {"service": "pathfinder", "status": "ok"}
