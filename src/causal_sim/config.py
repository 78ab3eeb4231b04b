from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 16
DEFAULT_DT = 0.32
DEFAULT_DAMPING = 0.26
DEFAULT_MAX_STEPS = 1000


@dataclass
class AppConfig:
    """Top-level configuration for the HTTP and CLI layers.

    - `root_dir`: Repository root (where `.env` is looked up).
    - `steps`, `dt`, `damping`: Integration defaults used when a request omits them.
    - `max_steps`: Largest step count an HTTP request may ask for.
    - `host`, `port`: Bind address for `causal-sim serve`.
    """

    root_dir: Path
    steps: int = DEFAULT_STEPS
    dt: float = DEFAULT_DT
    damping: float = DEFAULT_DAMPING
    max_steps: int = DEFAULT_MAX_STEPS
    host: str = "127.0.0.1"
    port: int = 5000

    def simulation_defaults(self) -> dict:
        return {"steps": self.steps, "dt": self.dt, "damping": self.damping}


def detect_repo_root() -> Path:
    """Detect repository root by walking upwards until `.env` or `src` exists.

    Falls back to current working directory.
    """
    cwd = Path.cwd().resolve()
    for p in [cwd] + list(cwd.parents):
        if (p / ".env").exists() or (p / "src").exists():
            return p
    return cwd


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        logger.warning(f"Ignoring invalid {name}={raw!r}; using {default}")
        return default
    return value


def load_config() -> AppConfig:
    # Load .env file from repository root
    root = detect_repo_root()
    load_dotenv(root / ".env")

    steps = _env_number("CAUSAL_SIM_STEPS", DEFAULT_STEPS, int)
    if steps <= 0:
        logger.warning(f"CAUSAL_SIM_STEPS must be positive; using {DEFAULT_STEPS}")
        steps = DEFAULT_STEPS

    max_steps = _env_number("CAUSAL_SIM_MAX_STEPS", DEFAULT_MAX_STEPS, int)
    if max_steps < steps:
        logger.warning(f"CAUSAL_SIM_MAX_STEPS must be at least {steps}; using {max(DEFAULT_MAX_STEPS, steps)}")
        max_steps = max(DEFAULT_MAX_STEPS, steps)

    return AppConfig(
        root_dir=root,
        steps=steps,
        dt=_env_number("CAUSAL_SIM_DT", DEFAULT_DT, float),
        damping=_env_number("CAUSAL_SIM_DAMPING", DEFAULT_DAMPING, float),
        max_steps=max_steps,
        host=os.getenv("CAUSAL_SIM_HOST", "127.0.0.1"),
        port=_env_number("CAUSAL_SIM_PORT", 5000, int),
    )
