from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from account_relay.config import settings
from account_relay.logger import logger
from account_relay.api.routes import accounts, auth, health

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"API Startup. Game backend: {settings.GAME_BACKEND_URL}")
    if not settings.FIREBASE_API_KEY:
        logger.warning("FIREBASE_API_KEY is not set; login and credential checks will fail")
    yield


app = FastAPI(
    title="Account Relay API",
    version=VERSION,
    description="Proxy for bulk local ID changes and account cloning on the game backend",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth.router)
app.include_router(accounts.router)
app.include_router(health.router)

@app.get("/")
async def root():
    return {"message": "Account Relay API", "version": VERSION}


def run():
    import uvicorn
    uvicorn.run("account_relay.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
