# voice_ordering/normalizer.py
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

TRAILING_PUNCTUATION = re.compile(r"[.,?!\s]+$")
WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Utterance:
    """One finalized transcript from a capture session"""
    transcript: str
    locale: str = "en-US"


def normalize(text: str) -> str:
    """Lowercase, trim and drop trailing . , ? ! runs"""
    text = (text or "").lower().strip()
    return TRAILING_PUNCTUATION.sub("", text)


def collapse_whitespace(text: str) -> str:
    return WHITESPACE.sub(" ", text).strip()


def strip_trailing_fillers(
    tokens: Sequence[str],
    fillers: Iterable[Tuple[str, ...]],
) -> List[str]:
    """Pop filler words off the end of a token list

    Only the tail is ever touched. A filler may span several tokens
    ("thank you"). Each pass removes at least one token, so the loop ends.
    """
    words = list(tokens)
    fillers = [tuple(f) for f in fillers if f]

    stripped = True
    while words and stripped:
        stripped = False
        for filler in fillers:
            n = len(filler)
            tail = tuple(w.rstrip(".,?!") for w in words[-n:])
            if n <= len(words) and tail == filler:
                del words[-n:]
                stripped = True
                break

    return words


def clean_phrase(text: str, fillers: Iterable[Tuple[str, ...]]) -> str:
    """normalize + collapse whitespace + strip trailing fillers"""
    text = collapse_whitespace(normalize(text))
    if not text:
        return ""
    words = strip_trailing_fillers(text.split(" "), fillers)
    # punctuation may sit in front of a stripped filler ("latte, please")
    return normalize(" ".join(words))
