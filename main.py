import argparse
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Flask

from routes import (
    register_api_routes,
    register_error_handlers,
    register_scouting_routes,
    register_season_routes,
)
from scouting.config import load_settings
from scouting.constants import (
    LOG_DIRNAME,
    LOG_FILENAME,
    SCOUTING_ENTRIES_FILENAME,
    SEASONS_FILENAME,
)
from scouting.entries import ScoutingEntryRepository
from scouting.seasons import SeasonRepository
from scouting.version_check import CURRENT_VERSION

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(data_dir: Path, level: int = logging.INFO) -> None:
    """Log to the console and to a rotating file under the data dir."""
    log_dir = Path(data_dir) / LOG_DIRNAME
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILENAME, maxBytes=1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def create_app(server_cfg: dict | None = None) -> Flask:
    """Build the scouting API app.

    Args:
        server_cfg: Server settings; loaded from config.yaml when omitted
    """
    if server_cfg is None:
        server_cfg, _ = load_settings()

    data_dir = Path(server_cfg["data_dir"])
    data_dir.mkdir(parents=True, exist_ok=True)

    app = Flask(__name__)
    max_upload_mb = int(server_cfg.get("max_upload_mb") or 10)
    app.config["MAX_CONTENT_LENGTH"] = max_upload_mb * 1024 * 1024
    app.config["DATA_DIR"] = str(data_dir)

    seasons = SeasonRepository(data_dir / SEASONS_FILENAME)
    entries = ScoutingEntryRepository(data_dir / SCOUTING_ENTRIES_FILENAME)

    register_error_handlers(app)
    register_api_routes(app)
    register_season_routes(app, seasons)
    register_scouting_routes(app, entries, seasons)

    app.logger.info(
        "[App] Scouting API v%s using data dir %s", CURRENT_VERSION, data_dir
    )
    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="Scouting data API server")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument(
        "--production", action="store_true", help="Serve with Waitress"
    )
    args = parser.parse_args()

    server_cfg, _ = load_settings(Path(args.config) if args.config else None)
    configure_logging(Path(server_cfg["data_dir"]))
    app = create_app(server_cfg)

    host = server_cfg["host"]
    port = int(server_cfg["port"])
    if args.production:
        from waitress import serve

        print("Starting in production mode (Waitress)...")
        print(f"Serving on http://{host}:{port}")
        serve(app, host=host, port=port)
    else:
        app.run(debug=True, host=host, port=port)


if __name__ == "__main__":
    main()
