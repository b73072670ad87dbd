import os
import logging
from typing import Optional

from flask import Flask, Response, jsonify, request, render_template_string
from flask_cors import CORS

from config import GameConfig, load_config
from main import SnakeGame
from page import PAGE_TEMPLATE
from services.controls import start_button_label
from services.frame_renderer import FrameRenderer, compute_cell_size
from services.game_session import GameSession
from services.highscore_store import create_highscore_store

MAX_PIXEL_RATIO = 4.0
# Widest board the page may ask for, in CSS pixels
MAX_CANVAS_PX = 2048


def create_session(config: GameConfig) -> GameSession:
    """Build the one game this process serves, with its high score store."""
    store = create_highscore_store(config.highscore_db)
    game = SnakeGame(
        tile_count=config.tile_count,
        food_reward=config.food_reward,
        high_score_store=store
    )
    return GameSession(
        game,
        step_seconds=config.step_seconds,
        max_catch_up_ticks=config.max_catch_up_ticks
    )


def create_app(config: Optional[GameConfig] = None, session: Optional[GameSession] = None) -> Flask:
    config = config or load_config()
    session = session or create_session(config)

    app = Flask(__name__)
    app.config["SNAKE_CONFIG"] = config
    app.config["SNAKE_SESSION"] = session

    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    else:
        allowed_origins = [
            f"http://localhost:{config.port}",
            f"http://127.0.0.1:{config.port}",
        ]
    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    def state_payload():
        snapshot = session.snapshot()
        payload = snapshot.to_dict()
        payload["start_label"] = start_button_label(snapshot.run_state)
        payload["step_ms"] = config.step_ms
        return payload

    @app.route("/", methods=["GET"])
    def index():
        snapshot = session.snapshot()
        return render_template_string(
            PAGE_TEMPLATE,
            high_score=snapshot.high_score,
            canvas_px=config.cell_size * config.tile_count,
            step_ms=config.step_ms,
            tile_count=config.tile_count,
            responsive=config.responsive_canvas,
            min_cell_size=config.min_cell_size,
        )

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """
        Current snapshot: snake, food, heading, score, high score, run state,
        plus the start button label and the step period.
        """
        return jsonify(state_payload())

    @app.route("/api/frame.png", methods=["GET"])
    def get_frame():
        """
        Rendered board.

        Query parameters:
        - size: available width in CSS pixels (responsive canvas only,
          capped at MAX_CANVAS_PX)
        - ratio: device pixel ratio (default 1)
        """
        try:
            ratio = request.args.get("ratio", default=1.0, type=float)
            size = request.args.get("size", default=None, type=int)
            if ratio is None or not 0 < ratio <= MAX_PIXEL_RATIO:
                raise ValueError(f"ratio must be in (0, {MAX_PIXEL_RATIO}]")

            if config.responsive_canvas and size:
                size = min(size, MAX_CANVAS_PX)
                cell_size = compute_cell_size(size, config.tile_count, config.min_cell_size)
            else:
                cell_size = config.cell_size

            renderer = FrameRenderer(cell_size, pixel_ratio=ratio)
            png = renderer.render_png(session.snapshot())
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        return Response(png, mimetype="image/png", headers={"Cache-Control": "no-store"})

    @app.route("/api/input", methods=["POST"])
    def post_input():
        """
        Direction input.

        Body: {"key": "<KeyboardEvent.key>"} or {"button": "up|down|left|right"}
        Keys the game does not use are accepted and ignored.
        """
        data = request.get_json(silent=True) or {}
        key = data.get("key")
        button = data.get("button")

        if isinstance(key, str):
            session.handle_key(key)
        elif isinstance(button, str):
            if not session.handle_button(button):
                return jsonify({"error": f"Unknown button '{button}'"}), 400
        else:
            return jsonify({"error": "Expected 'key' or 'button'"}), 400

        return jsonify(state_payload())

    @app.route("/api/start", methods=["POST"])
    def post_start():
        """Start or resume; after a game over this starts a fresh game."""
        session.start()
        return jsonify(state_payload())

    @app.route("/api/pause", methods=["POST"])
    def post_pause():
        session.pause()
        return jsonify(state_payload())

    @app.route("/api/resume", methods=["POST"])
    def post_resume():
        session.resume()
        return jsonify(state_payload())

    @app.route("/api/reset", methods=["POST"])
    def post_reset():
        session.reset()
        return jsonify(state_payload())

    @app.route("/api/visibility", methods=["POST"])
    def post_visibility():
        """Body: {"hidden": true|false}. Hiding the page pauses a running game."""
        data = request.get_json(silent=True) or {}
        hidden = data.get("hidden")
        if not isinstance(hidden, bool):
            return jsonify({"error": "Expected boolean 'hidden'"}), 400

        session.visibility_changed(hidden)
        return jsonify(state_payload())

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    game_config = load_config()
    # One request at a time: the session is not shared across threads
    create_app(game_config).run(
        host=game_config.host,
        port=game_config.port,
        debug=os.getenv("FLASK_DEBUG"),
        threaded=False
    )
