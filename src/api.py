"""
FastAPI adapter around the insight engine.

Records travel inline in the request body, newest first; this service does
not store them and performs no authentication.  Route handlers only convert
between JSON and engine models.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import setup_logging
from insight_engine import answer_question, detect_warnings, generate_insight
from models import HealthRecord, warnings_to_dicts

log = logging.getLogger("api")


# ─── App setup ─────────────────────────────────────────────

@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    log.info("Wellness Insight API started")
    yield


app = FastAPI(title="Wellness Insight API", version="1.0.0", lifespan=lifespan)

_origin_env = os.getenv("FRONTEND_ORIGINS", "")
_origins = [o.strip() for o in _origin_env.split(",") if o.strip()] or [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


class HealthRecordIn(BaseModel):
    timestamp: Optional[datetime] = None
    heart_rate: Optional[float] = Field(default=None, ge=20, le=250)
    sleep_duration: Optional[float] = Field(default=None, ge=0, le=24)
    water_intake: Optional[int] = Field(default=None, ge=0, le=50)
    stress_level: Optional[int] = Field(default=None, ge=1, le=10)
    activity_level: Optional[int] = Field(default=None, ge=0, le=1440)
    mood: Optional[Literal["happy", "neutral", "sad", "anxious", "energetic", "tired"]] = None

    def to_record(self) -> HealthRecord:
        return HealthRecord(
            timestamp=self.timestamp,
            heart_rate=self.heart_rate,
            sleep_duration=self.sleep_duration,
            water_intake=self.water_intake,
            stress_level=self.stress_level,
            activity_level=self.activity_level,
            mood=self.mood,
        )


class RecordsRequest(BaseModel):
    records: List[HealthRecordIn] = Field(default_factory=list)


class ChatRequest(RecordsRequest):
    message: str


def _records(body: RecordsRequest) -> List[HealthRecord]:
    return [r.to_record() for r in body.records]


# ─── Routes ────────────────────────────────────────────────

@app.get("/")
def root() -> Dict[str, Any]:
    return {"service": "wellness-insight-api", "status": "ok"}


@app.post("/api/v1/insights")
def insights(body: RecordsRequest) -> Dict[str, Any]:
    insight = generate_insight(_records(body))
    if insight is None:
        return {"insight": None, "status": "insufficient_data"}
    return {"insight": insight.to_dict(), "status": "ok"}


@app.post("/api/v1/warnings")
def warnings(body: RecordsRequest) -> Dict[str, Any]:
    found = detect_warnings(_records(body))
    return {"warnings": warnings_to_dicts(found), "count": len(found)}


@app.post("/api/v1/chat")
def chat(body: ChatRequest) -> Dict[str, Any]:
    message = body.message.strip()
    if not message:
        raise HTTPException(status_code=400, detail="message is required")
    reply = answer_question(message, _records(body))
    log.info("Chat answered (%d records, %d chars)", len(body.records), len(reply))
    return {"answer": reply}
