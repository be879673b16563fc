"""
Weather widget — Flask web UI.

Provides:
  - The widget page: search box, spinner, result card, error banner
  - Form action for the search box (button or Enter)
  - JSON API exposing the same display regions

Every region on the page comes from view.render(); routes only run
searches and hand the rendered fields to the template.
"""

import asyncio
import logging

from flask import Flask, render_template, request, jsonify, redirect, url_for

from config import WEB_SECRET

log = logging.getLogger(__name__)

_orchestrator = None  # set via create_app()


def _run_search(city: str):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(_orchestrator.search(city))
    finally:
        loop.close()


def create_app(orchestrator):
    global _orchestrator
    _orchestrator = orchestrator

    app = Flask(__name__)
    app.secret_key = WEB_SECRET

    # ── Pages ───────────────────────────────────────────────

    @app.route("/")
    def index():
        return render_template("index.html", view=_orchestrator.render())

    # ── Form actions ────────────────────────────────────────

    @app.route("/search", methods=["POST"])
    def action_search():
        city = request.form.get("city", "")
        outcome = _run_search(city)
        if outcome and not outcome.ok:
            log.info(f"Search for '{outcome.city}' ended with: {outcome.error}")
        return redirect(url_for("index"))

    # ── API endpoints ───────────────────────────────────────

    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(_orchestrator.render().to_dict())

    @app.route("/api/search", methods=["POST"])
    def api_search():
        data = request.get_json(silent=True) or {}
        city = data.get("city")
        if not isinstance(city, str):
            return jsonify({"error": "city is required"}), 400
        _run_search(city)
        return jsonify(_orchestrator.render().to_dict())

    return app
