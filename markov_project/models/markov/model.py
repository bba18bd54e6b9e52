import time
import numpy as np
from tqdm import tqdm

from markov_project.models.markov.context import ContextWindow
from markov_project.utils.dataloader import iter_tokens
from markov_project.utils.debugg_utils import Colors, print_resource_usage
from markov_project.utils.file_manager import write_chain, read_chain
from markov_project.utils.text_utils import is_end_of_sentence, capitalize


class MarkovChain:
    """
    Word-level Markov chain with backoff over every tail of the context.

    `chain` maps a tail (zero to `context_len` lowercase words joined by
    spaces) to a dict of the words seen after it and how often. Every
    observation is stored under all tails at once, so generation can fall
    back to a shorter context when the full one was never seen.
    """

    def __init__(self, context_len, rng=None, seed=None, enable_debug=False):
        if context_len < 1:
            raise ValueError(f"context_len must be >= 1, got {context_len}")
        self.context_len = context_len
        self.chain = {}
        # usage[k] counts words picked using a k-word tail
        self.usage = [0] * (context_len + 1)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.debug = enable_debug
        self._last_step_time = time.time()

    def _debug_resources(self, step_name):
        if not self.debug:
            return
        self._last_step_time = print_resource_usage(step_name, self._last_step_time)

    ############
    # Training #
    ############

    def add(self, context, word):
        """Count `word` as following every usable tail of `context`."""
        for i in range(self.context_len + 1):
            # Tails that still reach into the padding before START are skipped
            if i < self.context_len and context[i] == "":
                continue
            suffixes = self.chain.setdefault(context.tail(i), {})
            suffixes[word] = suffixes.get(word, 0) + 1

    def build(self, source, progress=False):
        """
        Train on a text stream, a string, or an iterable of words.

        Reading stops quietly at end of input. A read error also ends training
        (with a warning) instead of propagating, so a truncated corpus still
        yields a usable chain.

        Returns
        -------
        int
            Number of words consumed.
        """
        self._debug_resources("Start building chain")
        context = ContextWindow(self.context_len)
        consumed = 0
        words = tqdm(
            iter_tokens(source), desc="Building chain", unit=" words", disable=not progress
        )
        try:
            for word in words:
                self.add(context, word)
                context.shift(word)
                consumed += 1
        except (OSError, UnicodeDecodeError) as e:
            print(
                f"{Colors.WARNING}[WARN]{Colors.ENDC} Stopped reading training input after {consumed} words: {e}"
            )
        self._debug_resources("Finished building chain")
        return consumed

    ##############
    # Generation #
    ##############

    def next_word(self, context):
        """
        Pick a word to follow `context`, weighted by observed frequency.

        Tails are tried from longest to shortest. Candidates are walked in
        sorted order so a seeded generator always yields the same word.
        Side effect: bumps `usage` for the tail length that answered.
        Returns "" when the chain knows no continuation at all.
        """
        for i in range(self.context_len + 1):
            key = context.tail(i)
            suffixes = self.chain.get(key)
            if suffixes is None:
                continue

            self.usage[self.context_len - i] += 1

            total = sum(suffixes.values())
            if total == 0:
                continue
            n = self.rng.integers(total)
            result = ""
            for word in sorted(suffixes):
                # A zero count was never observed and must not win on n == 0
                if not suffixes[word]:
                    continue
                n -= suffixes[word]
                if n <= 0:
                    result = word
                    break

            # With no usable context the stored case is meaningless; follow
            # the previous word instead
            if key == "":
                if is_end_of_sentence(context.last):
                    result = capitalize(result)
                else:
                    result = result.lower()
            return result
        return ""

    def generate(self, start, sentences, max_words, seed=None):
        """
        Continue `start` with at most `max_words` words.

        Tries to produce exactly `sentences` sentences. If fewer complete
        within the word limit, the output is cut back to the last complete
        sentence; if none completed, the fragment is returned as is.

        Args:
            start (str): Prompt text, split on whitespace.
            sentences (int): Target number of sentences.
            max_words (int): Maximum number of generated words.
            seed (int, optional): Re-seed the chain's generator first.

        Returns:
            str: Prompt plus generated words, joined by single spaces.
        """
        if sentences < 0 or max_words < 0:
            raise ValueError("sentences and max_words must be non-negative")
        if seed is not None:
            self.rng = np.random.default_rng(seed)

        words = start.split()
        context = ContextWindow(self.context_len)
        for w in words[max(len(words) - self.context_len, 0):]:
            context.shift(w)

        sentence_count = 0
        sentence_end = 0
        for _ in range(max_words):
            if sentence_count >= sentences:
                break
            nxt = self.next_word(context)
            if not nxt:
                break
            words.append(nxt)
            context.shift(nxt)
            if is_end_of_sentence(nxt):
                sentence_count += 1
                sentence_end = len(words)

        if sentence_count < sentences and sentence_end > 0:
            words = words[:sentence_end]
        return " ".join(words)

    ###############
    # Persistence #
    ###############

    def save(self, file_path):
        """Write the frequency table as JSON. Raises OSError on failure."""
        return write_chain(self.chain, file_path)

    def load(self, file_path):
        """
        Replace the frequency table with the one stored at `file_path`.

        Raises OSError if the file can't be read and ChainFormatError if its
        content isn't a tail -> {word: count} mapping. The current table is
        left untouched on failure.
        """
        self.chain = read_chain(file_path)
        return self

    #################
    # Introspection #
    #################

    def size(self):
        return len(self.chain)

    def __len__(self):
        return self.size()

    def stats(self):
        """
        Histogram of tail lengths used while generating: entry k counts the
        words chosen using a k-word tail. Returns a copy.
        """
        return list(self.usage)

    def reset_stats(self):
        self.usage = [0] * (self.context_len + 1)
