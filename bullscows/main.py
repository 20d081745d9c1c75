'''
Bulls and Cows API (in-memory)

Endpoints:
POST /games                          -> start a game
GET  /games/{id}                     -> read state & history
POST /games/{id}/guess               -> submit a player guess
GET  /games/{id}/solver/next         -> the solver's next guess (not played)
POST /games/{id}/solver/step         -> solver plays one guess against the secret
POST /games/{id}/solver/feedback     -> report a score (checked when the secret is stored)
POST /games/{id}/solve               -> solver plays until solved
POST /games/{id}/reset               -> new secret, fresh candidate set

Extras:
GET  /stats                          -> scoreboard
POST /stats/reset                    -> reset scoreboard

Games live in memory only; restarting the server forgets them.
'''

import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .errors import AlreadySolvedError, ExhaustedCandidatesError, ValidationError
from .random_client import fetch_secret
from .store import Game, GameStore
from .schemas import (
    FeedbackRequest,
    GameState,
    GuessEntryOut,
    GuessRequest,
    GuessResponse,
    NewGameRequest,
    NewGameResponse,
    SolverGuessOut,
    StatsOut,
)

logger = logging.getLogger(__name__)

config.configure_logging()

app = FastAPI(title="Bulls and Cows API", version="1.0.0")
app.state.store = GameStore(strict_solver=config.STRICT_SOLVER)

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


def get_store(request: Request) -> GameStore:
    return request.app.state.store


# ---------------- Error mapping ----------------

def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, AlreadySolvedError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, ExhaustedCandidatesError):
        logger.warning("Solver exhausted: %s", exc)
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _found(game: Optional[Game]) -> Game:
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


# ---------------- DTO builders ----------------

def _to_guess_out(entry) -> GuessEntryOut:
    return GuessEntryOut(
        guess=entry.guess,
        bulls=entry.bulls,
        cows=entry.cows,
        message=entry.message,
        guesser=entry.guesser,
        timestamp=entry.timestamp,
    )


def _revealed_secret(game: Game) -> Optional[str]:
    return game.secret if game.status == "solved" else None


def _to_game_state(game: Game) -> GameState:
    return GameState(
        game_id=game.id,
        length=game.length,
        status=game.status,
        solved_by=game.solved_by,
        guesses_used=game.guesses_used,
        remaining_candidates=game.solver.remaining_count(),
        history=[_to_guess_out(h) for h in game.history],
        secret=_revealed_secret(game),
    )


def _to_guess_response(game: Game) -> GuessResponse:
    feedback = _to_guess_out(game.history[-1]) if game.history else None
    note = None
    if game.status == "solved":
        note = f"Solved by the {game.solved_by} in {game.guesses_used} guesses."
    return GuessResponse(
        status=game.status,
        feedback=feedback,
        guesses_used=game.guesses_used,
        remaining_candidates=game.solver.remaining_count(),
        secret=_revealed_secret(game),
        note=note,
    )


def _pick_secret(payload: NewGameRequest, default_length: int) -> Optional[str]:
    if payload.keep_secret:
        return None
    if payload.secret is not None:
        return payload.secret
    return fetch_secret(payload.length or default_length)


# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(
    payload: Optional[NewGameRequest] = None,
    store: GameStore = Depends(get_store),
) -> NewGameResponse:
    payload = payload or NewGameRequest()
    try:
        secret = _pick_secret(payload, config.SECRET_LENGTH)
        length = payload.length
        if length is None and secret is None:
            length = config.SECRET_LENGTH
        game = store.create(secret, length)
    except ValidationError as exc:
        raise _http_error(exc)

    return NewGameResponse(
        game_id=game.id,
        length=game.length,
        status=game.status,
        remaining_candidates=game.solver.remaining_count(),
    )


@app.get("/games/{game_id}", response_model=GameState, summary="Get current game state")
def get_game(game_id: str, store: GameStore = Depends(get_store)) -> GameState:
    return _to_game_state(_found(store.get(game_id)))


@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: GameStore = Depends(get_store),
) -> GuessResponse:
    try:
        game = store.guess(game_id, payload.guess)
    except (ValidationError, AlreadySolvedError, ExhaustedCandidatesError) as exc:
        raise _http_error(exc)
    return _to_guess_response(_found(game))


@app.get("/games/{game_id}/solver/next", response_model=SolverGuessOut, summary="Ask the solver for its next guess")
def solver_next(game_id: str, store: GameStore = Depends(get_store)) -> SolverGuessOut:
    try:
        guess = store.solver_guess(game_id)
    except (AlreadySolvedError, ExhaustedCandidatesError) as exc:
        raise _http_error(exc)
    game = _found(store.get(game_id))
    return SolverGuessOut(guess=guess, remaining_candidates=game.solver.remaining_count())


@app.post("/games/{game_id}/solver/step", response_model=GuessResponse, summary="Solver plays one guess")
def solver_step(game_id: str, store: GameStore = Depends(get_store)) -> GuessResponse:
    try:
        game = store.solver_step(game_id)
    except (ValidationError, AlreadySolvedError, ExhaustedCandidatesError) as exc:
        raise _http_error(exc)
    return _to_guess_response(_found(game))


@app.post("/games/{game_id}/solver/feedback", response_model=GuessResponse, summary="Report a score for a guess")
def solver_feedback(
    game_id: str,
    payload: FeedbackRequest,
    store: GameStore = Depends(get_store),
) -> GuessResponse:
    try:
        game = store.feedback(game_id, payload.guess, payload.bulls, payload.cows)
    except (ValidationError, AlreadySolvedError) as exc:
        raise _http_error(exc)
    return _to_guess_response(_found(game))


@app.post("/games/{game_id}/solve", response_model=GameState, summary="Solver plays until solved")
def solve_game(game_id: str, store: GameStore = Depends(get_store)) -> GameState:
    try:
        game = store.solve(game_id)
    except (ValidationError, AlreadySolvedError, ExhaustedCandidatesError) as exc:
        raise _http_error(exc)
    return _to_game_state(_found(game))


@app.post("/games/{game_id}/reset", response_model=NewGameResponse, summary="Reset a game")
def reset_game(
    game_id: str,
    payload: Optional[NewGameRequest] = None,
    store: GameStore = Depends(get_store),
) -> NewGameResponse:
    payload = payload or NewGameRequest()
    existing = _found(store.get(game_id))
    try:
        secret = _pick_secret(payload, existing.length)
        game = store.reset(game_id, secret=secret, length=payload.length)
    except ValidationError as exc:
        raise _http_error(exc)
    game = _found(game)
    return NewGameResponse(
        game_id=game.id,
        length=game.length,
        status=game.status,
        remaining_candidates=game.solver.remaining_count(),
    )


@app.get("/stats", response_model=StatsOut, summary="Get scoreboard")
def get_stats(store: GameStore = Depends(get_store)) -> StatsOut:
    stats = store.get_stats()
    avg = (stats.total_guesses_in_solved / stats.games_solved) if stats.games_solved > 0 else None
    return StatsOut(
        games_started=stats.games_started,
        games_solved=stats.games_solved,
        solved_by_player=stats.solved_by_player,
        solved_by_solver=stats.solved_by_solver,
        average_guesses_to_solve=avg,
        fastest_solve=stats.fastest_solve,
    )


@app.post("/stats/reset", summary="Reset the scoreboard")
def reset_stats(store: GameStore = Depends(get_store)) -> dict:
    store.reset_stats()
    return {"message": "Stats reset."}
