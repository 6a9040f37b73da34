# othellobot/config.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import os
import tomllib

from .eval import Evaluator, MODES, POSITIONAL, load_weights

CONFIG_ENV = "OTHELLOBOT_CONFIG"
DEFAULT_CONFIG_FILE = "othellobot.toml"


@dataclass
class SearchConfig:
    depth: int = 5
    max_time_ms: Optional[int] = None  # None means depth-only


@dataclass
class EvalConfig:
    mode: str = POSITIONAL  # "positional" or "discs"
    weights_file: Optional[str] = None  # JSON 8x8 matrix; default matrix if unset or missing


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def make_evaluator(self) -> Evaluator:
        weights = None
        if self.eval.weights_file:
            weights = load_weights(self.eval.weights_file)
        return Evaluator(self.eval.mode, weights)


def _section(cls, data: Dict[str, Any], name: str):
    raw = data.get(name, {})
    if not isinstance(raw, dict):
        raise ValueError(f"[{name}] must be a table")
    known = cls.__dataclass_fields__
    unknown = set(raw) - set(known)
    if unknown:
        raise ValueError(f"Unknown keys in [{name}]: {', '.join(sorted(unknown))}")
    return cls(**raw)


def load_config(path: Optional[str] = None) -> Config:
    """Load config from a TOML file; defaults when the file doesn't exist.

    The path defaults to $OTHELLOBOT_CONFIG, then ./othellobot.toml.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_FILE)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Config()
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e

    config = Config(
        search=_section(SearchConfig, data, "search"),
        eval=_section(EvalConfig, data, "eval"),
        server=_section(ServerConfig, data, "server"),
    )
    if config.search.depth < 1:
        raise ValueError(f"search.depth must be positive, got {config.search.depth}")
    if config.eval.mode not in MODES:
        raise ValueError(f"eval.mode must be one of {MODES}, got {config.eval.mode!r}")
    return config


CONFIG = load_config()
