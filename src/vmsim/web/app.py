"""Flask application factory for the vmsim web API.

The ``create_app`` function loads the backing store and returns a
Flask app with two endpoints:

- ``GET /api/config`` — return the machine configuration as JSON.
- ``POST /api/translate`` — run a fresh translator over an address list.

Each translate request gets its own translator, so requests never see
each other's page table or TLB state.
"""

from __future__ import annotations

import os
from typing import Any

from flask import Flask, Response, jsonify, request

from vmsim.config import ConfigError, SimulatorConfig
from vmsim.memory.backing_store import BackingStore
from vmsim.translator import AddressError, Translation, Translator

_HTTP_BAD_REQUEST = 400


def _translation_json(translation: Translation) -> dict[str, Any]:
    return {
        "virtual_address": translation.virtual_address,
        "physical_address": translation.physical_address,
        "value": translation.value,
        "page": translation.page,
        "frame": translation.frame,
        "tlb_hit": translation.tlb_hit,
        "page_fault": translation.page_fault,
    }


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"'{key}' must be an integer"
        raise ConfigError(msg)
    return value


def create_app(
    *,
    config: SimulatorConfig | None = None,
    backing_store: BackingStore | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Base configuration; read from the environment if omitted.
        backing_store: Page source; loaded from ``config.backing_store``
            if omitted.

    Returns:
        A configured Flask application ready to serve.

    Raises:
        BackingStoreError: If the backing store cannot be loaded.

    """
    base = config if config is not None else SimulatorConfig.from_env(os.environ)
    store = backing_store
    if store is None:
        store = BackingStore.from_path(
            base.backing_store,
            page_size=base.page_size,
            num_pages=base.num_pages,
        )

    app = Flask(__name__)

    @app.route("/api/config")
    def show_config() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the base machine configuration."""
        return jsonify(
            {
                "num_frames": base.num_frames,
                "tlb_capacity": base.tlb_capacity,
                "page_size": base.page_size,
                "num_pages": base.num_pages,
            }
        )

    @app.route("/api/translate", methods=["POST"])
    def translate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Translate an address list with a fresh translator.

        Expects JSON body: ``{"addresses": [...], "frames": N, "tlb_size": N}``
        where ``frames`` and ``tlb_size`` are optional.

        Returns:
            JSON with ``results`` and ``summary`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("addresses"), list):
            return jsonify({"error": "Missing 'addresses' list"}), _HTTP_BAD_REQUEST

        try:
            run_config = base.with_overrides(
                num_frames=_optional_int(data, "frames"),
                tlb_capacity=_optional_int(data, "tlb_size"),
            )
            translator = Translator(store, config=run_config)
            results = translator.run(data["addresses"])
        except (AddressError, ConfigError) as exc:
            return jsonify({"error": str(exc)}), _HTTP_BAD_REQUEST

        stats = translator.stats
        return jsonify(
            {
                "results": [_translation_json(t) for t in results],
                "summary": {
                    "translated": stats.translated,
                    "page_faults": stats.page_faults,
                    "page_fault_rate": stats.page_fault_rate,
                    "tlb_hits": stats.tlb_hits,
                    "tlb_hit_rate": stats.tlb_hit_rate,
                },
            }
        )

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``vmsim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
