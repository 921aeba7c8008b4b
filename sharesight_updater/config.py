from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel

from .errors import ConfigurationError
from .models import Credentials


def _asdict(model: BaseModel) -> Dict[str, Any]:
    """Return model data as a plain ``dict`` for Pydantic v1 or v2."""
    if hasattr(model, "model_dump"):
        return model.model_dump()  # type: ignore[attr-defined]
    return model.dict()


class AppConfig(BaseModel):
    """Typed configuration loaded from YAML or a ``KEY=VALUE`` file."""

    API_BASE_URL: str = "https://api.sharesight.com/api/v3"
    TOKEN_URL: str = "https://api.sharesight.com/oauth2/token"
    USER_AGENT: str = "github.com/RJ/sharesight-custom-investment-price-updater"
    LOG_LEVEL: str = "WARNING"
    # None leaves the timeout to requests, which waits indefinitely
    REQUEST_TIMEOUT: Optional[float] = None

    # Price feed used by ``scrape`` -------------------------------------
    VANGUARD_PRICE_URL: str = (
        "https://api.vanguard.com/rs/gre/gra/1.7.0//datasets/"
        "urd-product-port-specific-price-history.json"
    )
    SCRAPE_LOOKBACK_DAYS: int = 10


CREDENTIAL_VARS = ("CLIENT_ID", "CLIENT_SECRET")


def _load_env(path: Path) -> Dict[str, Any]:
    """Parse KEY=VALUE lines with the same rules python-dotenv applies to ``.env``."""
    return {key: val for key, val in dotenv_values(path).items() if val is not None}


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return content


def _config_path(environ: Mapping[str, str]) -> Path | None:
    config_path = environ.get("SHARESIGHT_CONFIG")
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        return path
    candidates = [Path.cwd() / "config.yaml", Path.cwd() / "config.yml"]
    return next((p for p in candidates if p.exists()), None)


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Load configuration from ``SHARESIGHT_CONFIG`` or ``config.yaml``.

    Keys missing from the file keep their defaults. ``SHARESIGHT_API_BASE_URL``
    overrides the API base URL regardless of the file contents.
    """
    env = os.environ if environ is None else environ
    path = _config_path(env)

    data: Dict[str, Any] = {}
    if path is not None:
        if path.suffix in {".yaml", ".yml"}:
            try:
                data = _load_yaml(path)
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
        else:
            data = _load_env(path)

    base_url = env.get("SHARESIGHT_API_BASE_URL")
    if base_url:
        data["API_BASE_URL"] = base_url

    cfg = {**_asdict(AppConfig()), **data}
    try:
        return AppConfig(**cfg)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def load_env_file(path: str | Path | None = None) -> bool:
    """Load a ``.env`` file into ``os.environ`` without overriding set values.

    The file is taken from ``path``, ``SHARESIGHT_ENV_FILE`` or ``.env`` in the
    working directory. Returns ``True`` when a file was loaded. A missing
    ``.env`` is fine; a missing file named explicitly is not.

    Raises:
        ConfigurationError: when an explicitly named file does not exist.
    """
    explicit = path or os.environ.get("SHARESIGHT_ENV_FILE")
    target = Path(explicit) if explicit else Path.cwd() / ".env"
    if not target.exists():
        if explicit:
            raise ConfigurationError(f"Env file not found: {target}")
        return False
    return load_dotenv(target, override=False)


def load_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Return :class:`Credentials` read from ``CLIENT_ID`` and ``CLIENT_SECRET``.

    Raises:
        ConfigurationError: when either variable is unset or empty.
    """
    env = os.environ if environ is None else environ
    missing = [name for name in CREDENTIAL_VARS if not env.get(name)]
    if missing:
        names = ", ".join(f"'{name}'" for name in missing)
        raise ConfigurationError(f"Missing {names} env var")
    return Credentials(client_id=env["CLIENT_ID"], client_secret=env["CLIENT_SECRET"])
