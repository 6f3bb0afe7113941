"""Persistent JSON configuration for the investor rate table."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from commission_engine.models.rates import DEFAULT_RATE_TABLE, RateTable

RATE_CONFIG_FILENAME = 'rate_table.json'
CONFIG_VERSION = 1


def rate_table_payload(table: RateTable) -> dict[str, Any]:
    """Serializable payload for a rate table."""
    return {
        'version': CONFIG_VERSION,
        'supported_periods': [int(p) for p in table.supported_periods],
        'rates': table.to_frame().to_dict(orient='records'),
    }


def rate_table_from_payload(payload: dict[str, Any]) -> RateTable:
    """Build a rate table from a config payload, rejecting unknown versions."""
    if not isinstance(payload, dict):
        raise ValueError('Rate configuration must be a JSON object.')
    version = int(payload.get('version', CONFIG_VERSION))
    if version != CONFIG_VERSION:
        raise ValueError(f'Unsupported rate configuration version {version}.')
    rows = payload.get('rates')
    if not isinstance(rows, list) or not rows:
        raise ValueError('Rate configuration requires a non-empty `rates` list.')
    periods = payload.get('supported_periods') or list(DEFAULT_RATE_TABLE.supported_periods)
    return RateTable.from_frame(pd.DataFrame(rows), supported_periods=tuple(int(p) for p in periods))


def load_rate_table(path: str) -> RateTable:
    """Load a rate table from disk. A missing file returns the default table."""
    p = Path(path)
    if not p.exists():
        return DEFAULT_RATE_TABLE
    with p.open('r', encoding='utf-8') as f:
        raw = json.load(f)
    return rate_table_from_payload(raw)


def save_rate_table(path: str, table: RateTable) -> None:
    """Persist a rate table to disk."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open('w', encoding='utf-8') as f:
        json.dump(rate_table_payload(table), f, indent=2, ensure_ascii=True)
