import os
import json
from pathlib import Path


class ChainFormatError(ValueError):
    """Raised when a persisted chain is not a {tail: {token: count}} mapping."""


def get_project_root(marker="markov_project"):
    """
    Find the project root by walking up until a folder named `marker` shows up.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / marker).exists():
            return parent
    raise FileNotFoundError(f"Project root not found. Couldn't locate folder '{marker}'")


def get_model_path(root, category, subdir=None, final=False):
    """
    Create and return a standardized path for experiment assets.

    Args:
        root (str): Root folder of the project.
        category (str): Asset type (e.g., "models", "plots").
        subdir (str, optional): Subfolder for a specific model.
        final (bool): Use "saved_models" instead of "experiments" as base folder.

    Returns:
        Path: Full path to the folder (created if missing).
    """
    if root is None:
        root = get_project_root()
    root = Path(root)
    base_folder = "experiments" if not final else "saved_models"
    exp_path = root / base_folder / category
    if subdir:
        exp_path = exp_path / subdir
    exp_path.mkdir(parents=True, exist_ok=True)
    return exp_path


def chain_filename(context_len):
    return f"markov_chain_c{context_len}.json"


def validate_chain(raw):
    """
    Check the decoded JSON shape and return a fresh {tail: {token: count}} dict.

    Counts must be non-negative ints; JSON booleans are rejected even though
    Python treats them as ints.
    """
    if not isinstance(raw, dict):
        raise ChainFormatError(
            f"Chain root must be an object, got {type(raw).__name__}"
        )
    chain = {}
    for tail, suffixes in raw.items():
        if not isinstance(suffixes, dict):
            raise ChainFormatError(
                f"Suffixes for tail {tail!r} must be an object, got {type(suffixes).__name__}"
            )
        counts = {}
        for word, freq in suffixes.items():
            if isinstance(freq, bool) or not isinstance(freq, int) or freq < 0:
                raise ChainFormatError(
                    f"Invalid count {freq!r} for {word!r} after tail {tail!r}"
                )
            counts[word] = freq
        chain[tail] = counts
    return chain


def write_chain(chain, file_path):
    """
    Save a chain table as JSON.

    Args:
        chain (dict): tail -> {token: count}.
        file_path (str | Path): Destination file. Its folder must exist.

    Returns:
        str: The path written.

    Raises:
        OSError: If the file cannot be created or written.
    """
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(chain, f, ensure_ascii=False)
    return str(file_path)


def read_chain(file_path):
    """
    Load and validate a chain table written by `write_chain`.

    Raises:
        FileNotFoundError / OSError: If the file cannot be opened or read.
        ChainFormatError: If the content is not valid JSON or has the wrong shape.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found in: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ChainFormatError(f"Malformed chain file {file_path}: {e}") from e

    return validate_chain(raw)
