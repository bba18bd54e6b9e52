SENTENCE_ENDINGS = (".", "!", "?")
# Closing marks allowed after the terminal punctuation, e.g. `man!"` or `(done.)`
CLOSING_MARKS = "\"'”’)]}»"


def is_end_of_sentence(word):
    """True if `word` ends with sentence punctuation, ignoring trailing quotes/brackets."""
    stripped = word.rstrip(CLOSING_MARKS)
    return stripped.endswith(SENTENCE_ENDINGS)


def capitalize(word):
    # str.capitalize() would lowercase the rest of the word
    if not word:
        return word
    return word[0].upper() + word[1:]
