from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
"""Root of the ``pmreport`` package tree."""

PROJECT_DIR = PACKAGE_DIR.parent
LOGGER = logging.getLogger(__name__)

DEFAULT_SIGNATURE_FETCH_TIMEOUT_S = 10.0

DEFAULT_CONFIG: dict[str, Any] = {
    "server": {"host": "0.0.0.0", "port": 8000},
    "report": {
        "logos": {
            "left": str(PACKAGE_DIR / "assets" / "logos" / "left.png"),
            "right": str(PACKAGE_DIR / "assets" / "logos" / "right.png"),
        },
        "signature_fetch_timeout_s": DEFAULT_SIGNATURE_FETCH_TIMEOUT_S,
        "allow_insecure_http": True,
        "images_base_url": "",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _resolve_config_path(path_text: str, config_path: Path) -> Path:
    path = Path(path_text)
    if path.is_absolute():
        return path
    return config_path.resolve().parent / path


@dataclass(slots=True)
class ServerConfig:
    host: str
    port: int

    def __post_init__(self) -> None:
        if not isinstance(self.port, int) or not (1 <= self.port <= 65535):
            raise ValueError(f"server.port must be 1-65535, got {self.port!r}")


@dataclass(slots=True)
class ReportConfig:
    left_logo_path: Path
    right_logo_path: Path
    signature_fetch_timeout_s: float
    allow_insecure_http: bool
    images_base_url: str

    def __post_init__(self) -> None:
        if (
            not isinstance(self.signature_fetch_timeout_s, (int, float))
            or self.signature_fetch_timeout_s <= 0
        ):
            LOGGER.warning(
                "report.signature_fetch_timeout_s=%s is not positive; using %s",
                self.signature_fetch_timeout_s,
                DEFAULT_SIGNATURE_FETCH_TIMEOUT_S,
            )
            object.__setattr__(
                self, "signature_fetch_timeout_s", DEFAULT_SIGNATURE_FETCH_TIMEOUT_S
            )
        object.__setattr__(self, "images_base_url", self.images_base_url.rstrip("/"))


@dataclass(slots=True)
class AppConfig:
    server: ServerConfig
    report: ReportConfig
    config_path: Path


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a YAML object at the top level.")
        return data


def _as_timeout(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValueError(
            f"report.signature_fetch_timeout_s must be a number, got {value!r}"
        ) from None


def _as_bool(value: object, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    path = config_path or (PROJECT_DIR / "config.yaml")
    path = path.resolve()
    override = _read_config_file(path)
    merged = _deep_merge(DEFAULT_CONFIG, override)

    server_cfg = merged.get("server") or {}
    try:
        server_port = int(server_cfg.get("port", 8000))
    except (TypeError, ValueError):
        raise ValueError(f"server.port must be an integer, got {server_cfg.get('port')!r}") from None

    report_cfg = merged.get("report") or {}
    if not isinstance(report_cfg, dict):
        raise ValueError("report must be a mapping")
    logos_cfg = report_cfg.get("logos") or {}
    logo_defaults = DEFAULT_CONFIG["report"]["logos"]

    return AppConfig(
        server=ServerConfig(
            host=str(server_cfg.get("host", "0.0.0.0")),
            port=server_port,
        ),
        report=ReportConfig(
            left_logo_path=_resolve_config_path(
                str(logos_cfg.get("left") or logo_defaults["left"]), path
            ),
            right_logo_path=_resolve_config_path(
                str(logos_cfg.get("right") or logo_defaults["right"]), path
            ),
            signature_fetch_timeout_s=_as_timeout(
                report_cfg.get("signature_fetch_timeout_s", DEFAULT_SIGNATURE_FETCH_TIMEOUT_S)
            ),
            allow_insecure_http=_as_bool(
                report_cfg.get("allow_insecure_http", True), "report.allow_insecure_http"
            ),
            images_base_url=str(report_cfg.get("images_base_url") or ""),
        ),
        config_path=path,
    )
