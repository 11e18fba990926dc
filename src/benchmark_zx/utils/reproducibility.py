"""Run provenance stored next to the result tables."""
from __future__ import annotations

import hashlib
import json
import platform
import subprocess
from typing import Any, Mapping

import numpy as np

from benchmark_zx.config import BenchConfig, config_from_dict


def config_payload(config: BenchConfig) -> dict[str, Any]:
    """JSON-ready form of ``config`` that ``config_from_dict`` accepts back."""
    return config.to_dict()


def config_hash(config: BenchConfig) -> str:
    encoded = json.dumps(config_payload(config), sort_keys=True).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def git_commit_hash() -> str | None:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
        ).strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def env_info() -> dict[str, str]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
    }


def run_record(config: BenchConfig) -> dict[str, Any]:
    """Provenance block for a manifest: the full config, its hash and the environment."""
    return {
        "config": config_payload(config),
        "config_hash": config_hash(config),
        "git_commit": git_commit_hash(),
        "env": env_info(),
    }


def config_from_record(record: Mapping[str, Any]) -> BenchConfig | None:
    """Rebuild the config of a recorded run.

    Returns ``None`` for manifests written without a config block. Raises
    ``ValueError`` when the block does not describe a valid config or when it
    no longer matches the recorded hash.
    """
    raw = record.get("config")
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValueError("Recorded config must be a mapping.")
    config = config_from_dict(raw)
    recorded_hash = record.get("config_hash")
    if recorded_hash is not None and recorded_hash != config_hash(config):
        raise ValueError("Recorded config does not match its config_hash.")
    return config
