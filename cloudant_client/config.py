import os
from typing import Optional

import yaml  # type: ignore
from pydantic import BaseModel, ConfigDict, SecretStr

CONFIG_PATH_ENV = "CLOUDANT_CONFIG"
ENV_PREFIX = "CLOUDANT_"


class EncryptedConfigError(ValueError):
    pass


class Settings(BaseModel):
    """Connection settings for a single database.

    The password is held as a ``SecretStr`` so it is not leaked by logging or printing the
    settings. Call ``password.get_secret_value()`` to read it.
    """

    model_config = ConfigDict(extra="forbid")

    host: str
    database: str
    username: str
    password: SecretStr
    timeout: float = 30.0


def _env_overrides() -> dict:
    overrides = {}
    for name in Settings.model_fields:
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value:
            overrides[name] = value
    return overrides


def read_config_file(path: str) -> dict:
    with open(path) as f:
        kw = yaml.safe_load(f) or {}
    if not isinstance(kw, dict):
        raise ValueError(f"Config file {path} must contain a mapping, not {type(kw).__name__}.")
    if "sops" in kw:
        raise EncryptedConfigError(f"Config file {path} is encrypted. Decrypt, then retry.")
    return kw


def load_settings(path: Optional[str] = None, **explicit) -> Settings:
    """Resolve ``Settings`` from a YAML file, the environment and explicit keyword arguments.

    Later sources win: file values are overridden by ``CLOUDANT_*`` environment variables,
    which are in turn overridden by any non-empty keyword arguments. The file is read from
    ``path`` or, if that is not given, from the path in the ``CLOUDANT_CONFIG`` env var.
    """
    path = path or os.environ.get(CONFIG_PATH_ENV)
    kw = read_config_file(path) if path else {}
    kw.update(_env_overrides())
    kw.update({k: v for k, v in explicit.items() if v})
    return Settings(**kw)
