"""FastAPI application factory and server entry point."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from . import __version__
from .config import AppConfig, load_config
from .report.pdf_assets import AssetLoader
from .routes import create_router

LOGGER = logging.getLogger(__name__)


@dataclass
class RuntimeState:
    config: AppConfig
    asset_loader: AssetLoader


def create_app(config_path: Path | None = None) -> FastAPI:
    config = load_config(config_path)
    runtime = RuntimeState(
        config=config,
        asset_loader=AssetLoader.from_config(config.report),
    )
    for slot, path in (
        ("left", config.report.left_logo_path),
        ("right", config.report.right_logo_path),
    ):
        if not path.exists():
            LOGGER.info("No %s logo at %s; reports will use the text label", slot, path)

    app = FastAPI(title="pmreport", version=__version__)
    app.state.runtime = runtime
    app.include_router(create_router(runtime))
    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the pmreport server")
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    args = parser.parse_args()

    runtime_app = create_app(config_path=args.config)
    runtime: RuntimeState = runtime_app.state.runtime
    host = runtime.config.server.host
    port = runtime.config.server.port
    try:
        uvicorn.run(
            runtime_app,
            host=host,
            port=port,
            log_level="info",
        )
    except OSError:
        LOGGER.error("Failed to bind to %s:%d.", host, port, exc_info=True)
        raise


if __name__ == "__main__":
    main()
