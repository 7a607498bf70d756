"""
api.py

HTTP surface over the conversation memory engine.
- create_app(store): FastAPI app with the store injected via app.state (tests pass their own)
- The chat handler posts each finished turn to /api/sessions/{id}/interactions
- Greeting, suggestions, history, cultural context and regions are read-only lookups

Environment:
- API_HOST / API_PORT: bind address for `python api.py` (default 0.0.0.0:3001)
- LOG_LEVEL: logging level (default INFO)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from core.calendar import current_cultural_context, region_insights
from core.locale import normalize_locale
from core.memory import MemoryStore
from core.router import interaction_hints
from core.session import interaction_to_dict, memory_to_dict
from core.suggestions import (
    contextual_suggestions,
    language_switch_notice,
    personalized_greeting,
    starter_suggestions,
)
from util.dates import as_date


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class InteractionRequest(BaseModel):
    user_message: str
    ai_response: str = ""
    language: str = "en"
    travel_type: Optional[str] = None
    destinations: Optional[list[str]] = None
    preferences: Optional[dict[str, Any]] = None
    recommended_packages: Optional[list[str]] = None
    follow_up_questions: Optional[list[str]] = None


def get_store(request: Request) -> MemoryStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = MemoryStore()
        request.app.state.store = store
    return store


def _interaction_extra(req: InteractionRequest) -> dict:
    """Caller-supplied fields win over travel type / destinations inferred from the message."""
    extra = interaction_hints(req.user_message)
    extra.update(req.model_dump(exclude_none=True, exclude={"user_message", "ai_response", "language"}))
    return extra


@router.post("/sessions/{session_id}/interactions")
def add_interaction(session_id: str, req: InteractionRequest, store: MemoryStore = Depends(get_store)):
    language = normalize_locale(req.language)
    previous = store.get_memory(session_id)
    notice = language_switch_notice(previous.preferred_language, language) if previous else ""

    interaction = store.add_interaction(
        session_id, req.user_message, req.ai_response, language, extra=_interaction_extra(req)
    )
    memory = store.get_memory(session_id)
    return {
        "interaction": interaction_to_dict(interaction),
        "context": memory_to_dict(memory)["conversation_context"],
        "total_interactions": memory.total_interactions,
        "language_notice": notice,
    }


@router.get("/sessions/{session_id}")
def get_session(session_id: str, locale: str = "en", store: MemoryStore = Depends(get_store)):
    return memory_to_dict(store.get_or_create_memory(session_id, locale))


@router.get("/sessions/{session_id}/interactions")
def recent_interactions(session_id: str, count: int = Query(5, ge=0), store: MemoryStore = Depends(get_store)):
    return {"interactions": [interaction_to_dict(i) for i in store.recent_interactions(session_id, count)]}


@router.get("/sessions/{session_id}/greeting")
def greeting(session_id: str, locale: str = "en", store: MemoryStore = Depends(get_store)):
    return {"greeting": personalized_greeting(store, session_id, locale)}


@router.get("/sessions/{session_id}/suggestions")
def suggestions(session_id: str, locale: str = "en", store: MemoryStore = Depends(get_store)):
    found = contextual_suggestions(store, session_id, locale)
    return {"suggestions": found, "starters": [] if found else starter_suggestions(locale)}


@router.patch("/sessions/{session_id}/preferences/personal")
def update_personal(session_id: str, partial: dict[str, Any] = Body(...), locale: str = "en",
                    store: MemoryStore = Depends(get_store)):
    store.update_personal_preferences(session_id, partial, locale)
    return memory_to_dict(store.get_memory(session_id))["personal_preferences"]


@router.patch("/sessions/{session_id}/preferences/cultural")
def update_cultural(session_id: str, partial: dict[str, Any] = Body(...), locale: str = "en",
                    store: MemoryStore = Depends(get_store)):
    return store.update_cultural_preferences(session_id, partial, locale).to_dict()


@router.patch("/sessions/{session_id}/context")
def update_context(session_id: str, partial: dict[str, Any] = Body(...), locale: str = "en",
                   store: MemoryStore = Depends(get_store)):
    store.update_conversation_context(session_id, partial, locale)
    return memory_to_dict(store.get_memory(session_id))["conversation_context"]


@router.delete("/sessions/{session_id}")
def clear_session(session_id: str, store: MemoryStore = Depends(get_store)):
    return {"cleared": store.clear_memory(session_id)}


@router.get("/sessions/{session_id}/export")
def export_session(session_id: str, store: MemoryStore = Depends(get_store)):
    memory = store.export_memory(session_id)
    if memory is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return memory_to_dict(memory)


@router.post("/sessions/import")
def import_session(payload: dict[str, Any] = Body(...), store: MemoryStore = Depends(get_store)):
    try:
        session_id = store.import_memory(payload)
    except (KeyError, ValueError, TypeError) as exc:
        raise HTTPException(status_code=422, detail=f"Invalid memory record: {exc}")
    return {"imported": session_id}


@router.get("/cultural-context")
def cultural_context(locale: str = "en", on: Optional[str] = Query(None, alias="date")):
    try:
        when = as_date(on) if on else None
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date: {on}")
    return current_cultural_context(locale, when).to_dict()


@router.get("/regions")
def regions(locale: str = "en", region_id: Optional[str] = Query(None, alias="id")):
    loc = normalize_locale(locale)
    return {"regions": [r.to_dict(loc) for r in region_insights(region_id)]}


def create_app(store: MemoryStore | None = None) -> FastAPI:
    app = FastAPI(title="Cultural Conversation Memory API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.store = store
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    uvicorn.run(app, host=os.getenv("API_HOST", "0.0.0.0"), port=int(os.getenv("API_PORT", "3001")))
