START = "START"


class ContextWindow:
    """
    Fixed-length window of the most recent lowercase words.

    A fresh window is padded with empty strings and ends with the START
    sentinel, marking the beginning of a block of text.
    """

    def __init__(self, context_len):
        if context_len < 1:
            raise ValueError(f"context_len must be >= 1, got {context_len}")
        self.words = [""] * context_len
        self.words[-1] = START

    @classmethod
    def create(cls, context_len):
        return cls(context_len)

    def shift(self, word):
        # Size never changes: drop the oldest, append the newest
        self.words = self.words[1:] + [word.lower()]

    def tail(self, i):
        """Space-joined suffix starting at offset `i` (i == len(self) gives "")."""
        return " ".join(self.words[i:])

    @property
    def last(self):
        return self.words[-1]

    def __len__(self):
        return len(self.words)

    def __getitem__(self, i):
        return self.words[i]

    def __repr__(self):
        return f"ContextWindow({self.words!r})"
