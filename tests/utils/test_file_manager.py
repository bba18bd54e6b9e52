import json
import pytest
from markov_project.models.markov.model import MarkovChain
from markov_project.utils.file_manager import (
    ChainFormatError,
    get_model_path,
    read_chain,
    write_chain,
)

# Pytest fixture to create a temporary directory for test files


@pytest.fixture
def temp_dir(tmp_path):
    return tmp_path


@pytest.fixture
def trained_chain():
    chain = MarkovChain(2)
    chain.build("I am not a number! I am a free man!")
    return chain


def test_save_and_load_round_trip(temp_dir, trained_chain):
    """
    A saved chain loaded into a fresh model has the same tails and counts.
    """
    # ARRANGE
    path = temp_dir / "chain.json"

    # ACT
    trained_chain.save(path)
    loaded = MarkovChain(2).load(path)

    # ASSERT
    assert path.exists()
    assert loaded.size() == trained_chain.size()
    assert loaded.chain == trained_chain.chain


def test_saved_file_is_object_of_objects(temp_dir, trained_chain):
    path = temp_dir / "chain.json"
    trained_chain.save(path)

    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    assert raw["i am"] == {"not": 1, "a": 1}
    assert all(isinstance(v, dict) for v in raw.values())


def test_load_replaces_instead_of_merging(temp_dir):
    path = temp_dir / "small.json"
    write_chain({"x": {"y": 3}}, path)
    chain = MarkovChain(1)
    chain.build("completely different words here")

    chain.load(path)

    assert chain.chain == {"x": {"y": 3}}
    assert chain.size() == 1


def test_load_nonexistent_file_keeps_model(temp_dir, trained_chain):
    """
    A missing file raises FileNotFoundError and leaves the table alone.
    """
    # ARRANGE
    before = {k: dict(v) for k, v in trained_chain.chain.items()}

    # ACT / ASSERT
    with pytest.raises(FileNotFoundError):
        trained_chain.load(temp_dir / "nonexistent.json")
    assert trained_chain.chain == before


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '{"a": [1, 2]}',
        '{"a": {"b": "three"}}',
        '{"a": {"b": true}}',
        '{"a": {"b": -1}}',
        '{"a": {"b": 1.5}}',
    ],
)
def test_malformed_content_raises_format_error(temp_dir, trained_chain, content):
    path = temp_dir / "bad.json"
    path.write_text(content, encoding="utf-8")
    size_before = trained_chain.size()

    with pytest.raises(ChainFormatError):
        trained_chain.load(path)
    assert trained_chain.size() == size_before


def test_format_error_is_a_value_error_not_an_os_error():
    assert issubclass(ChainFormatError, ValueError)
    assert not issubclass(ChainFormatError, OSError)


def test_save_into_missing_folder_raises_os_error(temp_dir, trained_chain):
    with pytest.raises(OSError):
        trained_chain.save(temp_dir / "missing" / "chain.json")


def test_read_chain_accepts_zero_counts(temp_dir):
    path = temp_dir / "zero.json"
    path.write_text('{"a": {"b": 0}}', encoding="utf-8")

    assert read_chain(path) == {"a": {"b": 0}}


def test_get_model_path_creates_folders(temp_dir):
    exp = get_model_path(temp_dir, "models", subdir="markov")
    final = get_model_path(temp_dir, "models", subdir="markov", final=True)

    assert exp == temp_dir / "experiments" / "models" / "markov"
    assert final == temp_dir / "saved_models" / "models" / "markov"
    assert exp.is_dir() and final.is_dir()
