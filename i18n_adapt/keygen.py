"""
Resource key derivation.

Keys are built from the first characters of a phrase and written in
camelCase: "Submit Form Now" and "submit form now!!" both become
``submitFormNow``. Keys are only unique within a namespace, and two phrases
that derive the same key overwrite each other. No disambiguation suffix is
added; the bounded key length is kept as-is.

An empty or punctuation-only phrase yields an empty key.
"""

from __future__ import annotations

import re

from i18n_adapt.config import KEY_PREFIX_LENGTH

_SEPARATORS = re.compile(r"[\W_]+")
# apostrophes join contractions: "Don't" -> "Dont"
_APOSTROPHES = re.compile("['\u2019]")


def _is_boundary(prev: str, cur: str, nxt: str) -> bool:
    if prev.isdigit() != cur.isdigit():
        return True
    if prev.islower() and cur.isupper():
        return True
    # end of an acronym: "HTMLParser" -> "HTML", "Parser"
    return prev.isupper() and cur.isupper() and nxt.islower()


def split_words(text: str) -> list[str]:
    """Split text into words the way a camelCase converter would.

    Non-alphanumeric runs separate words, and so do lower-to-upper case
    changes, the end of an acronym, and letter/digit transitions.
    Apostrophes are removed first so contractions stay one word.
    """
    words = []
    for chunk in _SEPARATORS.split(_APOSTROPHES.sub("", text)):
        if not chunk:
            continue
        start = 0
        for i in range(1, len(chunk)):
            nxt = chunk[i + 1] if i + 1 < len(chunk) else ""
            if _is_boundary(chunk[i - 1], chunk[i], nxt):
                words.append(chunk[start:i])
                start = i
        words.append(chunk[start:])
    return words


def derive_key(phrase: str, max_length: int = KEY_PREFIX_LENGTH) -> str:
    """Derive a camelCase resource key from the first ``max_length`` chars.

    Example:
        >>> derive_key("Submit Form Now")
        'submitFormNow'
        >>> derive_key("Invalid e-mail address!")
        'invalidEMailAddress'
        >>> derive_key("!!!")
        ''
    """
    words = split_words(phrase[:max_length])
    if not words:
        return ""
    first, rest = words[0].lower(), words[1:]
    return first + "".join(w[:1].upper() + w[1:].lower() for w in rest)
