from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from utils.env_loader import load_environments
from utils.log import get_logger

log = get_logger(__name__)

ENV_PREFIX = "MIG_"


class ConnectionParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    driver: str = Field(default="", description="Backend identifier, checked against the driver registry")
    host: str = "127.0.0.1"
    protocol: str = "tcp"
    port: int = Field(default=3306, ge=1, le=65535)
    dbname: str = ""
    user: str = ""
    password: str = ""
    charset: str = "utf8"
    dbpath: str = "./"
    table: str = "scheme_info"
    sslmode: str = "disable"

    def redacted(self) -> ConnectionParameters:
        if not self.password:
            return self
        return self.model_copy(update={"password": "***"})


def env_defaults(env_path: str) -> Dict[str, str]:
    """Read MIG_* keys from a .env style file into parameter defaults."""
    known = set(ConnectionParameters.model_fields)
    defaults: Dict[str, str] = {}
    for key, value in load_environments(env_path).items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX):].lower()
        if field_name in known:
            defaults[field_name] = value
    log.debug("Loaded %d connection defaults from %s", len(defaults), env_path)
    return defaults


def load_connection_parameters(
    overrides: Mapping[str, Any],
    env_path: Optional[str] = None,
) -> ConnectionParameters:
    values: Dict[str, Any] = env_defaults(env_path) if env_path else {}
    for key, value in overrides.items():
        if value is not None:
            values[key] = value
    return ConnectionParameters(**values)
