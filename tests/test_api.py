"""
Testing API via TestClient
- Trick: temporarily replace fetch_secret so the secret is predictable.
- Tool: pytest's "monkeypatch" fixture does that for just one test at a time.
"""

import bullscows.main as app_main


def fake_fetch_secret(length: int = 4) -> str:
    """Ignores randomness: "1234" for length 4, "0123..." otherwise."""
    if length == 4:
        return "1234"
    return "0123456789"[:length]


def start(client, monkeypatch, **body):
    # Patch the bound symbol that main.py actually uses
    monkeypatch.setattr(app_main, "fetch_secret", fake_fetch_secret)
    response = client.post("/games", json=body) if body else client.post("/games")
    assert response.status_code == 200
    return response.json()


def test_start_guess_and_win_with_fixed_secret(client, monkeypatch):
    """
    Flow:
    1) Start a game; secret is 1234 due to patch.
    2) Wrong-length and repeated-digit guesses -> 400, non-digits -> 422.
    3) Valid wrong guess -> feedback.
    4) Winning guess -> 'solved' and secret revealed.
    """
    new_game = start(client, monkeypatch)
    assert new_game["length"] == 4
    assert new_game["status"] == "in_progress"
    assert new_game["remaining_candidates"] == 5040
    assert "secret" not in new_game
    game_id = new_game["game_id"]

    assert client.post(f"/games/{game_id}/guess", json={"guess": "12345"}).status_code == 400
    assert client.post(f"/games/{game_id}/guess", json={"guess": "1123"}).status_code == 400
    assert client.post(f"/games/{game_id}/guess", json={"guess": "12ab"}).status_code == 422

    response = client.post(f"/games/{game_id}/guess", json={"guess": "1243"})
    assert response.status_code == 200
    body = response.json()
    assert body["feedback"]["bulls"] == 2
    assert body["feedback"]["cows"] == 2
    assert body["status"] == "in_progress"
    assert body["secret"] is None

    response = client.post(f"/games/{game_id}/guess", json={"guess": "1234"})
    assert response.status_code == 200
    final = response.json()
    assert final["status"] == "solved"
    assert final["secret"] == "1234"
    assert "2 guesses" in final["note"]


def test_cannot_guess_after_game_solved(client, monkeypatch):
    game_id = start(client, monkeypatch)["game_id"]

    assert client.post(f"/games/{game_id}/guess", json={"guess": "1234"}).status_code == 200

    response = client.post(f"/games/{game_id}/guess", json={"guess": "1234"})
    assert response.status_code == 409
    assert client.get(f"/games/{game_id}/solver/next").status_code == 409

    state = client.get(f"/games/{game_id}").json()
    assert state["guesses_used"] == 1
    assert state["solved_by"] == "player"


def test_unknown_game_is_404(client):
    assert client.get("/games/missing").status_code == 404
    assert client.post("/games/missing/guess", json={"guess": "1234"}).status_code == 404
    assert client.get("/games/missing/solver/next").status_code == 404
    assert client.post("/games/missing/solve").status_code == 404
    assert client.post("/games/missing/reset").status_code == 404


def test_solver_next_step_and_solve(client, monkeypatch):
    game_id = start(client, monkeypatch)["game_id"]

    response = client.get(f"/games/{game_id}/solver/next")
    assert response.status_code == 200
    assert response.json() == {"guess": "0123", "remaining_candidates": 5040}

    step = client.post(f"/games/{game_id}/solver/step").json()
    assert step["feedback"]["guess"] == "0123"
    assert step["feedback"]["guesser"] == "solver"
    assert (step["feedback"]["bulls"], step["feedback"]["cows"]) == (0, 3)
    assert step["remaining_candidates"] < 5040

    state = client.post(f"/games/{game_id}/solve").json()
    assert state["status"] == "solved"
    assert state["solved_by"] == "solver"
    assert state["secret"] == "1234"
    assert state["history"][-1]["guess"] == "1234"
    assert state["remaining_candidates"] == 0


def test_custom_secret_and_length(client, monkeypatch):
    game = start(client, monkeypatch, length=5)
    assert game["length"] == 5
    state = client.post(f"/games/{game['game_id']}/solve").json()
    assert state["secret"] == "01234"

    game = start(client, monkeypatch, secret="987")
    assert game["length"] == 3
    assert game["remaining_candidates"] == 720

    bad = client.post("/games", json={"secret": "1123"})
    assert bad.status_code == 400
    assert client.post("/games", json={"length": 11}).status_code == 422


def test_feedback_flow_with_hidden_secret(client, monkeypatch):
    game_id = start(client, monkeypatch, keep_secret=True)["game_id"]

    # no stored secret -> scoring must come from the caller
    assert client.post(f"/games/{game_id}/guess", json={"guess": "0123"}).status_code == 400

    response = client.post(
        f"/games/{game_id}/solver/feedback",
        json={"guess": "0123", "bulls": 0, "cows": 0},
    )
    assert response.status_code == 200
    assert client.get(f"/games/{game_id}/solver/next").json()["guess"] == "4567"

    # contradictory feedback leaves nothing to guess
    client.post(f"/games/{game_id}/solver/feedback", json={"guess": "4567", "bulls": 0, "cows": 0})
    response = client.get(f"/games/{game_id}/solver/next")
    assert response.status_code == 409

    bad = client.post(f"/games/{game_id}/solver/feedback", json={"guess": "8901", "bulls": 3, "cows": 3})
    assert bad.status_code == 400


def test_reset_game(client, monkeypatch):
    game_id = start(client, monkeypatch)["game_id"]
    client.post(f"/games/{game_id}/guess", json={"guess": "1234"})

    response = client.post(f"/games/{game_id}/reset", json={"secret": "5678"})
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"
    assert response.json()["remaining_candidates"] == 5040

    body = client.post(f"/games/{game_id}/guess", json={"guess": "0123"}).json()
    assert (body["feedback"]["bulls"], body["feedback"]["cows"]) == (0, 0)
    assert client.get(f"/games/{game_id}").json()["history"][0]["guess"] == "0123"


def test_stats_after_solves(client, monkeypatch):
    assert client.post("/stats/reset").status_code == 200

    first = start(client, monkeypatch)["game_id"]
    client.post(f"/games/{first}/guess", json={"guess": "1234"})
    second = start(client, monkeypatch)["game_id"]
    client.post(f"/games/{second}/solve")

    stats = client.get("/stats").json()
    assert stats["games_started"] == 2
    assert stats["games_solved"] == 2
    assert stats["solved_by_player"] == 1
    assert stats["solved_by_solver"] == 1
    assert stats["fastest_solve"] == 1
    assert stats["average_guesses_to_solve"] > 1


def test_feedback_with_stored_secret_is_checked(client, monkeypatch):
    game_id = start(client, monkeypatch)["game_id"]

    response = client.post(
        f"/games/{game_id}/solver/feedback",
        json={"guess": "0123", "bulls": 4, "cows": 0},
    )
    assert response.status_code == 400

    state = client.get(f"/games/{game_id}").json()
    assert state["status"] == "in_progress"
    assert state["secret"] is None
    assert client.get("/stats").json()["games_solved"] == 0
