#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
CONFIG - Načtení konfigurace z YAML
=============================================================================
Konfigurace je volitelná, bez ní platí DEFAULT_CONFIG. Příklad (config.yaml):

    toast:
      app_id: "Moje aplikace"
      audio: mail
      duration: short
      powershell: powershell
    logging:
      level: DEBUG
      targets: [console, file]
      file_path: logs/toast.log
=============================================================================
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError


DEFAULT_CONFIG: Dict[str, Any] = {
    "toast": {
        "app_id": "Windows App",
        "audio": "default",
        "duration": "short",
        "powershell": "powershell",
    },
    "logging": {
        "level": "INFO",
        "targets": ["console"],
        "file_path": None,
        "max_file_size_mb": 10,
        "backup_count": 3,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Rekurzivně přepíše hodnoty v base hodnotami z override."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def read_yaml(path: Union[str, Path]) -> Any:
    """
    Načte YAML soubor.

    Raises:
        ConfigError: soubor nejde přečíst nebo není platný YAML
    """
    config_file = Path(path)
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            # yaml.safe_load = bezpečně načte YAML do Python dict
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Nelze parsovat YAML {config_file}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Nelze načíst {config_file}: {e}") from e


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Načte konfiguraci a doplní chybějící hodnoty z DEFAULT_CONFIG.

    Args:
        path: Cesta ke config.yaml (None nebo neexistující soubor = výchozí hodnoty)

    Returns:
        Slovník s konfigurací
    """
    if path is None or not Path(path).exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    data = read_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Konfigurace {path} musí být slovník (mapping)")

    return _merge(DEFAULT_CONFIG, data)
