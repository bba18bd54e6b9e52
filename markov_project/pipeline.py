# -------------- UTILS IMPORTS ----------------
from markov_project.utils.debugg_utils import Colors
from markov_project.utils.dataloader import open_corpus
from markov_project.utils.file_manager import get_project_root

# -------------- MODEL / TRAINER IMPORTS ----------------
from markov_project.models.markov.model import MarkovChain
from markov_project.models.markov.trainer import MarkovTrainer

# -------------- OTHER IMPORTS ----------------
import os


class Markov_Pipeline:
    """
    Glue between corpus files, the trainer and the chain.

    `model_file` pins the chain to an explicit JSON path; without it the
    trainer's default location under <root>/experiments/models/markov is used.
    """

    def __init__(self, config, model_file=None, project_root=None, final=False, enable_debug=False):
        self.config = config
        self.model_file = model_file
        self.project_root = project_root or get_project_root()
        self.final = final
        self.trainer = MarkovTrainer(
            config, root=self.project_root, final=final, enable_debug=enable_debug
        )
        self.model = None
        print(
            f"{Colors.OKBLUE}[INFO]{Colors.ENDC}{Colors.HEADER} Context length: {config.context_len}{Colors.ENDC}"
        )

    def has_pretrained(self):
        if self.model_file is not None:
            return os.path.exists(self.model_file)
        return self.trainer.has_checkpoint()

    def train(self, corpus_paths=None, text=None, force_retrain=False, progress=True):
        if self.model_file is None:
            self.model = self.trainer.train(
                corpus_paths=corpus_paths,
                text=text,
                force_retrain=force_retrain,
                progress=progress,
            )
            return self.model

        if self.has_pretrained() and not force_retrain:
            return self.load_pretrained()

        # Explicit file: train without touching the default checkpoint folder
        self.model = MarkovChain(
            self.config.context_len,
            seed=self.config.seed,
            enable_debug=self.trainer.debug,
        )
        self.trainer.model = self.model
        if text is None:
            if corpus_paths is None:
                raise ValueError(
                    f"{Colors.FAIL}[FAIL]{Colors.ENDC} No chain at {self.model_file} and no training text given"
                )
            text = open_corpus(corpus_paths)
        self.model.build(text, progress=progress)
        self.model.save(self.model_file)
        print(f"{Colors.OKGREEN}[OK]{Colors.ENDC} Chain with {self.model.size()} tails saved to: {self.model_file}")
        return self.model

    def load_pretrained(self):
        """Load the chain from `model_file` or the trainer's default location."""
        if self.model_file is None:
            self.model = self.trainer._load_state()
        else:
            model = MarkovChain(
                self.config.context_len,
                seed=self.config.seed,
                enable_debug=self.trainer.debug,
            )
            model.load(self.model_file)
            self.model = model
            self.trainer.model = model
        print(f"{Colors.OKGREEN}[OK]{Colors.ENDC} Loaded chain with {self.model.size()} tails")
        return self.model

    def generate(self, prompt, sentences=None, max_words=None, seed=None):
        if self.model is None:
            self.load_pretrained()
        sentences = self.config.sentences if sentences is None else sentences
        max_words = self.config.max_words if max_words is None else max_words
        return self.model.generate(prompt, sentences, max_words, seed=seed)

    def report_stats(self, plot=False):
        """Print the tail-length histogram and optionally save it as a bar chart."""
        stats = self.model.stats()
        print(f"\n{Colors.OKCYAN}[STATS]{Colors.ENDC} Chain size: {self.model.size()} tails")
        for k, count in enumerate(stats):
            print(f"  {k} context words: {count}")
        if plot:
            return self.trainer.plot_usage_stats(stats, final=self.final)
        return None
