import os
import logging
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from data_access import get_high_score, set_high_score
from domain.config import GameConfig
from domain.constants import VALID_MODES
from engine import session as engine
from engine.spawner import purge_expired_powerups
from services.session_store import SessionStore, SessionNotFound

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

sessions = SessionStore(GameConfig.from_env())


def _error(message: str, status: int):
    return jsonify({"error": message}), status


@app.errorhandler(SessionNotFound)
def handle_missing_session(error):
    return _error(f"Session '{error.args[0]}' not found", 404)


def _state(session):
    # Lifetime sweep runs on every access, whether or not the game is running
    purge_expired_powerups(session, session.clock())
    return engine.snapshot(session).to_dict()


@app.route("/api/sessions", methods=["POST"])
def create_session():
    """
    Create a game session.

    Body: {"mode": "human" | "ai" | "vs"} (default "human")
    """
    payload = request.get_json(silent=True) or {}
    mode = payload.get("mode", "human")
    if mode not in VALID_MODES:
        return _error(f"Invalid mode '{mode}'. Expected one of {sorted(VALID_MODES)}", 400)

    try:
        high_score = get_high_score()
    except Exception as error:
        logger.error(f"Could not read high score: {error}")
        high_score = 0

    session_id = sessions.create(mode, high_score=high_score)
    with sessions.use(session_id) as session:
        return jsonify({"session_id": session_id, "state": _state(session)}), 201


@app.route("/api/sessions/<session_id>", methods=["GET"])
def get_session(session_id):
    with sessions.use(session_id) as session:
        return jsonify({"state": _state(session)})


@app.route("/api/sessions/<session_id>", methods=["DELETE"])
def delete_session(session_id):
    sessions.discard(session_id)
    return jsonify({"deleted": session_id})


@app.route("/api/sessions/<session_id>/start", methods=["POST"])
def start_session(session_id):
    with sessions.use(session_id) as session:
        engine.start_session(session)
        return jsonify({"state": _state(session)})


@app.route("/api/sessions/<session_id>/pause", methods=["POST"])
def pause_session(session_id):
    with sessions.use(session_id) as session:
        paused = engine.toggle_pause(session)
        return jsonify({"paused": paused, "state": _state(session)})


@app.route("/api/sessions/<session_id>/reset", methods=["POST"])
def reset_session(session_id):
    with sessions.use(session_id) as session:
        engine.reset_session(session)
        return jsonify({"state": _state(session)})


@app.route("/api/sessions/<session_id>/mode", methods=["POST"])
def change_mode(session_id):
    payload = request.get_json(silent=True) or {}
    mode = payload.get("mode")
    if mode not in VALID_MODES:
        return _error(f"Invalid mode '{mode}'. Expected one of {sorted(VALID_MODES)}", 400)
    with sessions.use(session_id) as session:
        changed = engine.set_mode(session, mode)
        return jsonify({"changed": changed, "state": _state(session)})


@app.route("/api/sessions/<session_id>/direction", methods=["POST"])
def set_direction(session_id):
    """
    Body: {"x": -1|0|1, "y": -1|0|1}

    Invalid or reversing directions are accepted by the endpoint but ignored
    by the game; "accepted" reports which happened.
    """
    payload = request.get_json(silent=True) or {}
    try:
        x, y = int(payload["x"]), int(payload["y"])
    except (KeyError, TypeError, ValueError):
        return _error("Body must contain integer 'x' and 'y'", 400)

    with sessions.use(session_id) as session:
        accepted = engine.set_direction(session, x, y)
        return jsonify({"accepted": accepted})


@app.route("/api/sessions/<session_id>/tick", methods=["POST"])
def tick_session(session_id):
    with sessions.use(session_id) as session:
        purge_expired_powerups(session, session.clock())
        result = engine.tick(session)

    if result.new_high_score:
        try:
            set_high_score(result.snapshot.high_score)
        except Exception as error:
            logger.error(f"Could not persist high score: {error}")

    return jsonify(result.to_dict())


@app.route("/api/high-score", methods=["GET"])
def read_high_score():
    try:
        return jsonify({"high_score": get_high_score()})
    except Exception as error:
        logger.error(f"Error reading high score: {error}")
        return _error("Failed to read high score", 500)


@app.route("/api/high-score", methods=["PUT"])
def write_high_score():
    payload = request.get_json(silent=True) or {}
    try:
        value = int(payload["value"])
        if value < 0:
            raise ValueError(value)
        stored = set_high_score(value)
    except (KeyError, TypeError, ValueError):
        return _error("Body must contain a non-negative integer 'value'", 400)
    except Exception as error:
        logger.error(f"Error writing high score: {error}")
        return _error("Failed to write high score", 500)
    return jsonify({"high_score": stored})


@app.route("/api/config", methods=["GET"])
def read_config():
    return jsonify(sessions.config.to_dict())


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port)
