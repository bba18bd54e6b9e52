import os

import matplotlib.pyplot as plt

from markov_project.models.markov.model import MarkovChain
from markov_project.utils.dataloader import open_corpus
from markov_project.utils.debugg_utils import Colors
from markov_project.utils.file_manager import (
    chain_filename,
    get_model_path,
    get_project_root,
)
from markov_project.utils.tracker import track


class MarkovTrainer:
    def __init__(self, config, model=None, root=None, final=False, enable_debug=False):
        self.config = config
        self.context_len = config.context_len
        self.model = model
        self.root = root if root is not None else get_project_root()
        self.final = final
        self.debug = enable_debug

    def _new_model(self):
        return MarkovChain(
            self.context_len,
            seed=getattr(self.config, "seed", None),
            enable_debug=self.debug,
        )

    def _model_path(self, filename=None, final=None):
        final_flag = final if final is not None else self.final
        folder = get_model_path(self.root, "models", subdir="markov", final=final_flag)
        return os.path.join(folder, filename or chain_filename(self.context_len))

    def _save_state(self, filename=None, final=None):
        """
        Save the chain table under <root>/experiments/models/markov.

        Args:
            filename (str): File name, defaults to markov_chain_c{context_len}.json
            final (bool): Save in the saved_models folder if True

        Returns:
            str: Full path of saved file
        """
        if self.model is None:
            raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Model not initialized")
        return self.model.save(self._model_path(filename, final))

    def _load_state(self, filename=None, final=None):
        """
        Load a chain table from disk into a fresh MarkovChain.

        Raises:
            FileNotFoundError: If no checkpoint exists.
            ChainFormatError: If the checkpoint is malformed.
        """
        model = self._new_model()
        model.load(self._model_path(filename, final))
        self.model = model
        return self.model

    def has_checkpoint(self, filename=None, final=None):
        return os.path.exists(self._model_path(filename, final))

    @track
    def train(self, corpus_paths=None, text=None, force_retrain=False, progress=True, final=None):
        """
        Build the chain from corpus files (or raw text) and save it.

        An existing checkpoint for this context length is loaded instead,
        unless `force_retrain` is set.
        """
        if self.has_checkpoint(final=final) and not force_retrain:
            print(
                f"{Colors.OKBLUE}[INFO]{Colors.ENDC} Loading pre-trained chain from:\n{self._model_path(final=final)}"
            )
            return self._load_state(final=final)

        if corpus_paths is None and text is None:
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} No checkpoint found and no training text given"
            )
        source = text if text is not None else open_corpus(corpus_paths)

        print(f"--- Training Markov chain (context length {self.context_len}) ---")
        self.model = self._new_model()
        consumed = self.model.build(source, progress=progress)
        if consumed == 0:
            print(f"{Colors.WARNING}[WARN]{Colors.ENDC} Training text was empty")

        saved_path = self._save_state(final=final)
        print(f"{Colors.OKGREEN}[OK]{Colors.ENDC} Chain with {self.model.size()} tails saved to: {saved_path}")
        return self.model

    def plot_usage_stats(self, stats=None, filename="usage_stats.png", final=False):
        """
        Bar chart of how many generated words used each tail length.
        Respects final/experiments folder logic. Returns the saved path.
        """
        if stats is None:
            if self.model is None:
                raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Model not initialized")
            stats = self.model.stats()

        if not any(stats):
            print(f"{Colors.WARNING}[WARN]{Colors.ENDC} No usage stats to plot.")
            return None

        labels = [str(k) for k in range(len(stats))]
        fig, ax = plt.subplots(figsize=(8, 5))
        bars = ax.bar(labels, stats, color="skyblue", edgecolor="black")
        ax.set_xlabel("Context words used")
        ax.set_ylabel("Generated words")
        ax.set_title("Backoff usage per tail length")
        for bar in bars:
            yval = bar.get_height()
            ax.text(bar.get_x() + bar.get_width() / 2.0, yval, f"{int(yval)}", va="bottom", ha="center")

        save_folder = get_model_path(root=self.root, category="plots", subdir="markov", final=final)
        save_path = os.path.join(save_folder, filename)
        try:
            fig.savefig(save_path, bbox_inches="tight", dpi=150)
        finally:
            plt.close(fig)
        print(f"{Colors.OKGREEN}[OK]{Colors.ENDC} Usage stats plot saved to {save_path}")
        return save_path
