"""ABI loading helpers."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .exceptions import ValidationError

# ABI of the reference storage contract: a greeting plus a stored uint256.
STORAGE_ABI: list[dict[str, Any]] = [
    {
        "inputs": [],
        "name": "message",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "retrieve",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "num", "type": "uint256"}],
        "name": "store",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def load_abi(
    source: str | Path | Sequence[dict[str, Any]] | dict[str, Any],
) -> list[dict[str, Any]]:
    """Load a contract ABI from a JSON file, JSON text or an already parsed value.

    Hardhat/Truffle style artifacts (objects with an ``"abi"`` key) are
    unwrapped.
    """
    is_json_text = isinstance(source, str) and source.lstrip().startswith(("[", "{"))
    if isinstance(source, Path) or (isinstance(source, str) and not is_json_text):
        path = Path(source)
        try:
            data: Any = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ValidationError(
                f"Unable to load ABI from {path}",
                field="abi",
                value=str(path),
                details={"error": str(exc)},
            ) from exc
    elif isinstance(source, str):
        try:
            data = json.loads(source)
        except json.JSONDecodeError as exc:
            raise ValidationError(
                "ABI text is not valid JSON", field="abi", details={"error": str(exc)}
            ) from exc
    else:
        data = source

    if isinstance(data, dict):
        data = data.get("abi")

    if not isinstance(data, list | tuple) or not all(isinstance(entry, dict) for entry in data):
        raise ValidationError("ABI must be a list of JSON objects", field="abi")

    return [dict(entry) for entry in data]
