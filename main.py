import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal_coach.auth import routes as auth_router
from journal_coach.journals import routes as journals_router
from journal_coach.coaching import routes as coaching_router
from journal_coach.system import routes as system_router
from journal_coach.core.config import CORS_ORIGINS, LOG_LEVEL
from journal_coach.core.database import Base, engine

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Journal Coach API",
    version="1.0.0",
    description="Backend for journaling with mood tracking and coaching.",
)

# CORS config
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(system_router.router)
app.include_router(auth_router.router)
app.include_router(journals_router.router)
app.include_router(coaching_router.router)


# DB Tables
@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
