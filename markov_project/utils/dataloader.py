import os


def _read_lines(paths):
    for path in paths:
        # Binary read with per-line decoding: a bad byte only costs its own line
        with open(path, "rb") as f:
            for raw in f:
                yield raw.decode("utf-8")


def open_corpus(paths):
    """
    Stream the lines of one or more training files, in order.

    Missing files raise FileNotFoundError right away, before any training
    starts. Decode or read errors surface lazily while the lines are consumed,
    which `MarkovChain.build` treats as the end of the input.
    """
    if isinstance(paths, (str, os.PathLike)):
        paths = [paths]
    paths = list(paths)
    for path in paths:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Corpus file not found: {path}")
    return _read_lines(paths)


def iter_tokens(source):
    """
    Yield whitespace-separated words.

    `source` may be a string, a readable text stream, or any iterable of
    lines or already split words. Streams are consumed line by line so large
    corpora never sit in memory.
    """
    if isinstance(source, str):
        yield from source.split()
        return
    if hasattr(source, "readline"):
        for line in source:
            yield from line.split()
        return
    for item in source:
        yield from str(item).split()
