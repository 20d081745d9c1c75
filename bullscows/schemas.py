"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.

Digit-level checks (length, repeats) depend on the game's length, so the
routes leave those to the store, which raises ValidationError (-> 400).
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator


def _only_digits(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.isdigit():
        raise ValueError("Only the digits 0-9 are allowed.")
    return value


# 1. Body for starting (or resetting) a game
class NewGameRequest(BaseModel):
    secret: Optional[str] = Field(None, description="Pick the secret yourself; random when omitted")
    length: Optional[int] = Field(None, ge=2, le=10, description="Secret length (2..10)")
    keep_secret: bool = Field(
        False, description="True = no stored secret; you report scores via /solver/feedback"
    )

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, secret: Optional[str]) -> Optional[str]:
        return _only_digits(secret)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {},
                {"length": 5},
                {"secret": "1234"},
                {"length": 4, "keep_secret": True},
            ]
        }
    }


# 2. Response when a new game is started
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; secret is never returned")
    length: int = Field(..., description="Number of digits in the secret")
    status: Literal["in_progress", "solved"] = Field(..., description="Current state of the game")
    remaining_candidates: int = Field(..., description="Secrets the solver still considers possible")


# 3. Validates a player's guess
class GuessRequest(BaseModel):
    guess: str = Field(..., description="Distinct digits, as many as the game's length")

    @field_validator("guess")
    @classmethod
    def validate_digits(cls, guess: str) -> str:
        return _only_digits(guess)

    model_config = {"json_schema_extra": {"examples": [{"guess": "0123"}]}}


# 4. Score reported by whoever holds the secret
class FeedbackRequest(BaseModel):
    guess: str = Field(..., description="The guess that was scored")
    bulls: int = Field(..., ge=0, le=10, description="Right digit, right place")
    cows: int = Field(..., ge=0, le=10, description="Right digit, wrong place")

    @field_validator("guess")
    @classmethod
    def validate_digits(cls, guess: str) -> str:
        return _only_digits(guess)


# 5. Feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: str = Field(..., description="The digits guessed")
    bulls: int = Field(..., description="Right digit, right place")
    cows: int = Field(..., description="Right digit, wrong place")
    message: str = Field(..., description="Feedback message")
    guesser: Literal["player", "solver"] = Field(..., description="Who made the guess")
    timestamp: float = Field(..., description="When the guess was made")


# 6. Overall state of the game
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    length: int = Field(..., description="Number of digits in the secret")
    status: Literal["in_progress", "solved"] = Field(..., description="Current state of the game")
    solved_by: Optional[Literal["player", "solver"]] = Field(None, description="Who found the secret")
    guesses_used: int = Field(..., description="Guesses made so far")
    remaining_candidates: int = Field(..., description="Secrets the solver still considers possible")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")
    secret: Optional[str] = Field(None, description="Revealed only once the game is solved")


# 7. Result of a guess or a solver step
class GuessResponse(BaseModel):
    status: Literal["in_progress", "solved"] = Field(..., description="Current state of the game")
    feedback: Optional[GuessEntryOut] = Field(None, description="Feedback from the latest guess")
    guesses_used: int = Field(..., description="Guesses made so far")
    remaining_candidates: int = Field(..., description="Secrets the solver still considers possible")
    secret: Optional[str] = Field(None, description="The secret (only revealed once solved)")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Solved in 6 guesses.')")


# 8. The solver's suggestion, not yet played
class SolverGuessOut(BaseModel):
    guess: str = Field(..., description="What the solver would guess next")
    remaining_candidates: int = Field(..., description="Secrets the solver still considers possible")


# 9. Scoreboard
class StatsOut(BaseModel):
    games_started: int = Field(..., description="Games started (or reset) this process")
    games_solved: int = Field(..., description="Games solved this process")
    solved_by_player: int = Field(..., description="Games where the player found the secret")
    solved_by_solver: int = Field(..., description="Games where the solver found the secret")
    average_guesses_to_solve: Optional[float] = Field(
        None, description="Average number of guesses in solved games"
    )
    fastest_solve: Optional[int] = Field(None, description="Fewest guesses taken to solve a game")
