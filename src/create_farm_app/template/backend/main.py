import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

load_dotenv()

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def connect_db() -> None:
    app.mongodb_client = AsyncIOMotorClient(os.getenv("DB_URL", "mongodb://localhost:27017"))
    app.mongodb = app.mongodb_client[os.getenv("DB_NAME", "farm")]


@app.on_event("shutdown")
async def close_db() -> None:
    app.mongodb_client.close()


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Hello from the FARM stack"}
