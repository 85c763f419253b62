import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from .grid import validate_shape
from .model import SUDOKU_9X9, Digit, GridConfig, GridShapeError, Table

PathLike = Union[str, Path]

UNKNOWN_MARKERS = {"", "null", "none", "*", "0", ".", "_", "-"}
SUPPORTED_SUFFIXES = (".csv", ".json", ".txt", ".sdk")


def normalize_token(token: Any) -> Optional[Digit]:
    """
    Map one raw field to a digit or None. Blank, zero, and placeholder markers
    are unknown, and so is anything that does not read as an integer.
    """
    if token is None or isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token or None
    if isinstance(token, float):
        # pandas pads short rows with NaN
        if token != token or not token.is_integer():
            return None
        return int(token) or None
    text = str(token).strip()
    if text.lower() in UNKNOWN_MARKERS:
        return None
    try:
        return int(text) or None
    except ValueError:
        return None


def load_csv(file_path: PathLike) -> Table:
    """Headerless CSV, one grid row per line."""
    try:
        df = pd.read_csv(
            file_path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.ParserError as e:
        # a later row has more fields than the first one
        raise GridShapeError(f"{file_path}: rows have different numbers of fields") from e
    if df.isna().to_numpy().any():
        raise GridShapeError(f"{file_path}: rows have different numbers of fields")
    return [[normalize_token(v) for v in row] for row in df.to_numpy().tolist()]


def load_json(file_path: PathLike) -> Table:
    """JSON array of arrays holding digits or null."""
    with open(file_path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("grid", payload.get("puzzle"))
    if not isinstance(payload, list) or not all(isinstance(row, list) for row in payload):
        raise ValueError(f"{file_path}: expected an array of arrays")
    return [[normalize_token(v) for v in row] for row in payload]


def parse_text(text: str, config: GridConfig = SUDOKU_9X9) -> Table:
    """
    Rows separated by newlines. A row is either whitespace/comma separated
    tokens or a run of single characters ("53..7...."). A single line holding
    every cell is split into rows of `config.length`.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line and not line.startswith("#")]

    def _tokens(line: str) -> List[str]:
        if re.search(r"[\s,]", line):
            return [t for t in re.split(r"[\s,]+", line) if t != ""]
        return list(line)

    if len(lines) == 1:
        tokens = _tokens(lines[0])
        if len(tokens) == config.total_cells:
            n = config.length
            return [[normalize_token(t) for t in tokens[i:i + n]] for i in range(0, len(tokens), n)]
    return [[normalize_token(t) for t in _tokens(line)] for line in lines]


def load_text(file_path: PathLike, config: GridConfig = SUDOKU_9X9) -> Table:
    with open(file_path, "r", encoding="utf-8") as f:
        return parse_text(f.read(), config)


def load_table(file_path: PathLike, config: GridConfig = SUDOKU_9X9) -> Table:
    """Read a puzzle file (.csv, .json, .txt, .sdk) and check it fits `config`."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        table = load_csv(file_path)
    elif suffix == ".json":
        table = load_json(file_path)
    elif suffix in (".txt", ".sdk"):
        table = load_text(file_path, config)
    else:
        raise ValueError(f"Unsupported puzzle format: {suffix or file_path}")

    validate_shape(table, config)
    return table


def list_puzzle_files(path: PathLike) -> List[Path]:
    """The file itself, or every supported file in a directory sorted by name."""
    path = Path(path)
    if path.is_file():
        return [path]
    if path.is_dir():
        return [p for p in sorted(path.iterdir()) if p.suffix.lower() in SUPPORTED_SUFFIXES]
    raise FileNotFoundError(f"File not found: {path}")


def load_puzzles(path: PathLike, config: GridConfig = SUDOKU_9X9) -> List[Dict[str, Any]]:
    """Load every puzzle under `path` into records with `id`, `path`, and `table`."""
    return [
        {"id": file_path.stem, "path": file_path, "table": load_table(file_path, config)}
        for file_path in list_puzzle_files(path)
    ]
