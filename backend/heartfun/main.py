from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from heartfun.api.frames import router as frames_router
from heartfun.api.history import router as history_router
from heartfun.api.zones import router as zones_router
from heartfun.core.config import settings
from heartfun.core.logging_setup import setup_logging


setup_logging(settings.log_level)

app = FastAPI(title="heart-fun")

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(frames_router)
app.include_router(history_router)
app.include_router(zones_router)


@app.get("/")
def root():
    return {"message": "heart-fun backend is running"}
