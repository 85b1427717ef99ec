from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from .error import register_error_handlers
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemoryMatchStore
from ...engine.board import BoardState
from ...engine.game import Match
from ...engine.legality import is_legal_move
from ...engine.move import Move, parse_uci
from ...engine.perft import perft as perft_nodes
from ...engine.terminal import classify, count_material, is_in_check
from ...engine.types import Color, Outcome


logger = logging.getLogger(__name__)


class CreateMatchResponse(BaseModel):
    match_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="UCI move string, e.g., e2e4")


class LegalityRequest(BaseModel):
    fen: str = Field(..., description="FEN string")
    move: str = Field(..., description="UCI move string")


class LegalityResponse(BaseModel):
    legal: bool


class ClassifyRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class Material(BaseModel):
    white: int
    black: int


class ClassifyResponse(BaseModel):
    outcome: str
    in_check: bool
    checkmate: bool
    draw: bool
    material: Material


class PerftRequest(BaseModel):
    fen: str = Field(..., description="FEN string")
    depth: int = Field(default=1, ge=0, le=3)


class MatchState(BaseModel):
    match_id: str
    fen: str
    to_move: str
    legal_moves: list[str]
    in_check: bool
    checkmate: bool
    stalemate: bool
    draw: bool
    outcome: str
    winner: Optional[str]
    material: Material
    last_move: Optional[str]
    move_history: list[str]
    record: str


def create_app(log_level: int = logging.INFO) -> FastAPI:
    app = FastAPI(title="Hook Chess Rules API", version="0.1.0")

    logging.basicConfig(level=log_level)

    app.add_middleware(RequestIDLoggingMiddleware)
    register_error_handlers(app)

    store = InMemoryMatchStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/matches", response_model=CreateMatchResponse)
    async def create_match() -> CreateMatchResponse:
        match_id = store.create(Match.new())
        match = _require_match(store, match_id)
        logger.info("match created", extra={"match_id": match_id})
        return CreateMatchResponse(match_id=match_id, fen=match.to_fen())

    @app.get("/api/matches/{match_id}/state", response_model=MatchState)
    async def get_state(match_id: str) -> MatchState:
        return _match_state(match_id, _require_match(store, match_id))

    @app.post("/api/matches/{match_id}/position", response_model=MatchState)
    async def set_position(match_id: str, req: SetPositionRequest) -> MatchState:
        _require_match(store, match_id)
        try:
            match = Match.from_fen(req.fen)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        store.set(match_id, match)
        logger.info("position set", extra={"match_id": match_id})
        return _match_state(match_id, _require_match(store, match_id))

    @app.post("/api/matches/{match_id}/move", response_model=MatchState)
    async def make_move(match_id: str, req: MoveRequest) -> MatchState:
        match = _require_match(store, match_id)
        move = _parse_move(req.move)
        try:
            match.apply_move(move)
        except ValueError:
            logger.info("move rejected", extra={"match_id": match_id, "move": req.move})
            raise
        logger.info("move applied", extra={"match_id": match_id, "move": move.to_uci()})
        state = _match_state(match_id, match)
        if state.outcome != Outcome.ONGOING:
            logger.info(
                "match finished",
                extra={"match_id": match_id, "outcome": state.outcome, "winner": state.winner},
            )
        return state

    @app.delete("/api/matches/{match_id}", status_code=204)
    async def delete_match(match_id: str) -> Response:
        if not store.delete(match_id):
            raise HTTPException(status_code=404, detail="match not found")
        return Response(status_code=204)

    @app.post("/api/legal", response_model=LegalityResponse)
    async def legal(req: LegalityRequest) -> LegalityResponse:
        board = _parse_fen(req.fen)
        return LegalityResponse(legal=is_legal_move(board, _parse_move(req.move)))

    @app.post("/api/classify", response_model=ClassifyResponse)
    async def classify_position(req: ClassifyRequest) -> ClassifyResponse:
        board = _parse_fen(req.fen)
        outcome = classify(board)
        return ClassifyResponse(
            outcome=outcome.value,
            in_check=is_in_check(board, board.to_move),
            checkmate=outcome is Outcome.CHECKMATE,
            draw=outcome.is_draw,
            material=_material(board),
        )

    # Plain def so the tree walk runs in the threadpool, off the event loop
    @app.post("/api/perft")
    def perft(req: PerftRequest) -> Dict[str, int]:
        board = _parse_fen(req.fen)
        return {"nodes": perft_nodes(board, req.depth)}

    return app


def _require_match(store: InMemoryMatchStore, match_id: str) -> Match:
    match = store.get(match_id)
    if match is None:
        raise HTTPException(status_code=404, detail="match not found")
    return match


def _parse_fen(fen: str) -> BoardState:
    try:
        return BoardState.from_fen(fen)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid FEN")


def _parse_move(text: str) -> Move:
    try:
        return parse_uci(text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _material(board: BoardState) -> Material:
    return Material(
        white=count_material(board, Color.WHITE),
        black=count_material(board, Color.BLACK),
    )


def _match_state(match_id: str, match: Match) -> MatchState:
    result = match.result()
    history = match.move_history_uci()
    return MatchState(
        match_id=match_id,
        fen=match.to_fen(),
        to_move="white" if match.board.to_move is Color.WHITE else "black",
        legal_moves=[m.to_uci() for m in match.legal_moves()],
        in_check=match.in_check(),
        checkmate=result.outcome is Outcome.CHECKMATE,
        stalemate=result.outcome is Outcome.STALEMATE,
        draw=result.outcome.is_draw,
        outcome=result.outcome.value,
        winner=None if result.winner is None else result.winner.name.lower(),
        material=_material(match.board),
        last_move=history[-1] if history else None,
        move_history=history,
        record=match.board.to_bytes().hex(),
    )


# Default app for non-factory servers
app = create_app()
