# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Client configuration discovery.

Priority (first non-empty wins), per setting:
  1. explicit argument
  2. environment (STACKEXCHANGE_ROOT / _ACCESS_TOKEN / _KEY / _SITE)
  3. ~/.config/stackexchange.yml

Example ~/.config/stackexchange.yml:
    site: stackoverflow
    key: U4DMV*8nvpm3EOpvf69Rxw((
    access_token: "..."
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

_logger = logging.getLogger(__name__)

ENV_ROOT = "STACKEXCHANGE_ROOT"
ENV_ACCESS_TOKEN = "STACKEXCHANGE_ACCESS_TOKEN"
ENV_KEY = "STACKEXCHANGE_KEY"
ENV_SITE = "STACKEXCHANGE_SITE"


def default_config_path() -> Path:
    return Path.home() / ".config" / "stackexchange.yml"


@dataclass(frozen=True)
class StackExchangeConfig:
    root: str = ""
    access_token: str = ""
    key: str = ""
    site: str = ""


def read_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read the YAML config file; missing, unreadable or malformed files yield {}."""
    p = Path(path) if path is not None else default_config_path()
    try:
        if not p.exists():
            return {}
        with open(p, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        _logger.debug("Ignoring Stack Exchange config %s: %s", p, e)
        return {}
    if not isinstance(data, dict):
        _logger.debug("Ignoring Stack Exchange config %s: top level is not a mapping", p)
        return {}
    return data


def load_config(
    *,
    root: Optional[str] = None,
    access_token: Optional[str] = None,
    key: Optional[str] = None,
    site: Optional[str] = None,
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> StackExchangeConfig:
    env = os.environ if environ is None else environ
    file_cfg = read_config_file(path)

    def _pick(arg: Optional[str], env_name: str, file_key: str) -> str:
        return str(arg or env.get(env_name) or file_cfg.get(file_key) or "").strip()

    cfg = StackExchangeConfig(
        root=_pick(root, ENV_ROOT, "root"),
        access_token=_pick(access_token, ENV_ACCESS_TOKEN, "access_token"),
        key=_pick(key, ENV_KEY, "key"),
        site=_pick(site, ENV_SITE, "site"),
    )
    _logger.debug(
        "Stack Exchange config: root=%s site=%s access_token=%s key=%s",
        cfg.root or "(default)",
        cfg.site or "(unset)",
        "set" if cfg.access_token else "unset",
        "set" if cfg.key else "unset",
    )
    return cfg
