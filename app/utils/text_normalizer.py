import re

# . , / # ! $ % ^ & * ; : { } = - _ ` ~ ( )
_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "and", "a", "to", "of", "in", "i", "is", "that", "it", "on",
        "you", "this", "for", "but", "with", "are", "have", "be", "at", "or",
        "as", "was", "so", "if", "out", "not", "me", "my", "dream", "dreamed",
        "saw", "felt", "like", "just", "had", "about", "from", "up", "down",
        "went", "go", "get", "see", "one", "what", "some", "can", "very",
        "really", "then", "when", "there",
    }
)

MIN_SYMBOL_LENGTH = 3


def normalize_text(text: str) -> str:
    """Lower-case text and strip the fixed punctuation set.

    Args:
        text: Raw dream narrative.

    Returns:
        str: Lower-cased text with punctuation characters removed.
    """
    return _PUNCTUATION_RE.sub("", text.lower())


def extract_symbols(text: str | None) -> list[str]:
    """Split a narrative into candidate symbol tokens, in order of appearance.

    Tokens shorter than three characters and stop words are dropped.
    Empty or missing text yields no tokens.
    """
    if not text:
        return []
    return [
        token
        for token in normalize_text(text).split()
        if len(token) >= MIN_SYMBOL_LENGTH and token not in STOP_WORDS
    ]
