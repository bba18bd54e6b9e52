class BaseConfig:
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)


class MarkovConfig(BaseConfig):
    """
    Settings shared by the trainer, pipeline and CLI.

    Args:
        context_len (int): Number of words in the context window (prefix length).
        sentences (int): Target number of sentences to generate.
        max_words (int): Hard cap on generated words (excluding the prompt).
        seed (int or None): Seed for the chain's random generator.
    """

    def __init__(
        self,
        context_len=2,
        sentences=1,
        max_words=100,
        seed=None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if context_len < 1:
            raise ValueError(f"context_len must be >= 1, got {context_len}")
        if sentences < 0 or max_words < 0:
            raise ValueError("sentences and max_words must be non-negative")

        self.context_len = context_len
        self.sentences = sentences
        self.max_words = max_words
        self.seed = seed

    def display(self):
        print("Markov chain configuration")
        for k, v in self.__dict__.items():
            print(f"{k}, {v}")
