import logging
import uuid
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Response

from services.assessment_engine.engine import AssessmentSession
from services.assessment_engine.models import InvalidConfidenceError
from quiz_api.core.config import settings
from quiz_api.schemas.assessment import (
    ActionResponse,
    ConfidenceRequest,
    QuestionBankResponse,
    SelectOptionRequest,
    SessionCreatedResponse,
    SessionView,
)
from quiz_api.services.session_store import SessionNotFoundError, SessionRegistry, get_session_registry
from quiz_api.services.views import build_session_view, question_view

router = APIRouter()
logger = logging.getLogger(__name__)


def _lookup(registry: SessionRegistry, session_id: uuid.UUID) -> AssessmentSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError:
        logger.warning("Unknown assessment session requested", extra={"session_id": session_id})
        raise HTTPException(status_code=404, detail=f"Assessment session '{session_id}' not found.")


def _run_action(session_id: uuid.UUID, session: AssessmentSession, action: Callable[[], bool], name: str) -> ActionResponse:
    """Applies one user action and returns whether it was accepted plus the resulting view."""
    context = {"session_id": session_id, "action": name}
    try:
        accepted = action()
        logger.debug(
            "Assessment action applied" if accepted else "Assessment action rejected",
            extra={**context, "screen": session.screen},
        )
        return ActionResponse(
            accepted=accepted,
            view=build_session_view(session, settings.estimated_minutes),
        )
    except InvalidConfidenceError as e:
        logger.error(f"Invalid confidence: {e}", extra=context)
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error during assessment action: {e}", extra=context)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/assessment/questions", response_model=QuestionBankResponse)
async def list_questions(registry: SessionRegistry = Depends(get_session_registry)):
    """
    Lists the question bank in presentation order, without answers or explanations.
    """
    bank = registry.bank
    return QuestionBankResponse(
        title=bank.title,
        round_label=bank.round_label,
        questions=[question_view(q) for q in bank],
    )


@router.post("/assessment/sessions", response_model=SessionCreatedResponse, status_code=201)
async def create_session(registry: SessionRegistry = Depends(get_session_registry)):
    """Opens a new, isolated session on the intro screen."""
    session_id = registry.create()
    session = registry.get(session_id)
    return SessionCreatedResponse(
        session_id=session_id,
        view=build_session_view(session, settings.estimated_minutes),
    )


@router.get("/assessment/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: uuid.UUID, registry: SessionRegistry = Depends(get_session_registry)):
    session = _lookup(registry, session_id)
    return build_session_view(session, settings.estimated_minutes)


@router.delete("/assessment/sessions/{session_id}", status_code=204)
async def delete_session(session_id: uuid.UUID, registry: SessionRegistry = Depends(get_session_registry)):
    try:
        registry.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Assessment session '{session_id}' not found.")
    return Response(status_code=204)


@router.post("/assessment/sessions/{session_id}/start", response_model=ActionResponse)
async def start_assessment(session_id: uuid.UUID, registry: SessionRegistry = Depends(get_session_registry)):
    session = _lookup(registry, session_id)
    return _run_action(session_id, session, session.start, "start")


@router.post("/assessment/sessions/{session_id}/select", response_model=ActionResponse)
async def select_option(
    session_id: uuid.UUID,
    request: SelectOptionRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _lookup(registry, session_id)
    return _run_action(session_id, session, lambda: session.select_option(request.option_id), "select")


@router.post("/assessment/sessions/{session_id}/confidence", response_model=ActionResponse)
async def set_confidence(
    session_id: uuid.UUID,
    request: ConfidenceRequest,
    registry: SessionRegistry = Depends(get_session_registry),
):
    session = _lookup(registry, session_id)
    return _run_action(session_id, session, lambda: session.set_confidence(request.value), "confidence")


@router.post("/assessment/sessions/{session_id}/reveal", response_model=ActionResponse)
async def reveal_explanation(session_id: uuid.UUID, registry: SessionRegistry = Depends(get_session_registry)):
    session = _lookup(registry, session_id)
    return _run_action(session_id, session, session.reveal_explanation, "reveal")


@router.post("/assessment/sessions/{session_id}/next", response_model=ActionResponse)
async def record_and_advance(session_id: uuid.UUID, registry: SessionRegistry = Depends(get_session_registry)):
    session = _lookup(registry, session_id)
    return _run_action(session_id, session, session.record_and_advance, "next")


@router.post("/assessment/sessions/{session_id}/reset", response_model=ActionResponse)
async def reset_assessment(session_id: uuid.UUID, registry: SessionRegistry = Depends(get_session_registry)):
    session = _lookup(registry, session_id)
    return _run_action(session_id, session, session.reset, "reset")
