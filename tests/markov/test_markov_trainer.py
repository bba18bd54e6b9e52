import os
import pytest
from markov_project.models.configs.configs import MarkovConfig
from markov_project.models.markov.trainer import MarkovTrainer
from markov_project.utils.file_manager import ChainFormatError

PRISONER = "I am not a number! I am a free man!"

# Each test gets its own root so saved chains never leak between tests.


@pytest.fixture
def markov_trainer_setup(tmp_path):
    """Sets up a MarkovTrainer with a temporary directory as its root."""
    return MarkovTrainer(MarkovConfig(context_len=2, seed=7), root=tmp_path)


def test_train_save_load_model(markov_trainer_setup, tmp_path):
    """
    Integration test: trains, saves, and reloads a chain, verifying its state.
    """
    trainer1 = markov_trainer_setup

    # ACT 1: Train and save
    model1 = trainer1.train(text=PRISONER, progress=False)

    # ASSERT 1: Check that the checkpoint was created
    model_path = os.path.join(tmp_path, "experiments", "models", "markov", "markov_chain_c2.json")
    assert os.path.exists(model_path)

    # ACT 2: A new trainer with no text loads the checkpoint
    trainer2 = MarkovTrainer(MarkovConfig(context_len=2), root=tmp_path)
    model2 = trainer2.train()

    # ASSERT 2: Loaded state matches
    assert model2 is not model1
    assert model2.size() == model1.size()
    assert model2.chain == model1.chain


def test_train_from_corpus_files(markov_trainer_setup, tmp_path):
    corpus = tmp_path / "corpus.txt"
    corpus.write_text(PRISONER, encoding="utf-8")

    model = markov_trainer_setup.train(corpus_paths=[corpus], progress=False)

    assert model.size() == 16


def test_force_retrain_overwrites_checkpoint(markov_trainer_setup):
    markov_trainer_setup.train(text=PRISONER, progress=False)

    model = markov_trainer_setup.train(text="completely new text", force_retrain=True, progress=False)

    assert "i am" not in model.chain
    reloaded = markov_trainer_setup._load_state()
    assert reloaded.chain == model.chain


def test_train_without_text_or_checkpoint_raises(markov_trainer_setup):
    with pytest.raises(ValueError):
        markov_trainer_setup.train()


def test_corrupt_checkpoint_raises_format_error(markov_trainer_setup):
    path = markov_trainer_setup._model_path()
    with open(path, "w", encoding="utf-8") as f:
        f.write("[]")

    with pytest.raises(ChainFormatError):
        markov_trainer_setup.train()


def test_plot_usage_stats(markov_trainer_setup, tmp_path):
    model = markov_trainer_setup.train(text=PRISONER, progress=False)
    model.generate("I am", 1, 10)

    save_path = markov_trainer_setup.plot_usage_stats()

    assert save_path is not None
    assert os.path.exists(save_path)
    assert save_path.startswith(str(tmp_path))


def test_plot_usage_stats_skips_empty(markov_trainer_setup):
    markov_trainer_setup.train(text=PRISONER, progress=False)

    assert markov_trainer_setup.plot_usage_stats() is None


def test_invalid_utf8_ends_training_but_keeps_valid_lines(markov_trainer_setup, tmp_path, capsys):
    # ARRANGE: the second line is not valid UTF-8
    corpus = tmp_path / "broken.txt"
    corpus.write_bytes(PRISONER.encode("utf-8") + b"\n\xff\xfe bad\n")

    # ACT
    model = markov_trainer_setup.train(corpus_paths=[corpus], progress=False)

    # ASSERT
    assert model.size() == 16
    assert "[WARN]" in capsys.readouterr().out
    assert markov_trainer_setup.has_checkpoint()
