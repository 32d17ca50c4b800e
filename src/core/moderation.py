"""
Profanity check for user text (posts, comments, team names).

The blocklist is passed in by the caller, normally loaded from
moderation.yaml by settings.load_blocked_words().

Blocklist entries are matched as whole words after both sides are
normalised. A ``*`` at the start or end of an entry extends it over joined
words ("fuck*" also hits "fuckoff"); a ``*`` inside an entry stands for a
masked letter written as ``*`` in the text ("b*tch").
"""
import re
from typing import Dict, Iterable

LEET_REPLACEMENTS = str.maketrans({
    '0': 'o', '1': 'i', '3': 'e', '4': 'a', '5': 's', '7': 't', '8': 'b',
    '@': 'a', '$': 's', '!': 'i',
})

# Letters plus the masking character count as part of a word
WORD_CHARS = '[a-z*]'


def normalize_text(text: str) -> str:
    """Lowercase, undo common character swaps and keep only letters, masks and spaces."""
    text = text.lower().translate(LEET_REPLACEMENTS)
    return re.sub(r'[^a-z\s*]', '', text)


def _entry_pattern(word: str) -> str:
    stem = word.strip('*')
    body = r'\*'.join(re.escape(part) for part in stem.split('*'))
    prefix = WORD_CHARS + '*' if word.startswith('*') else ''
    suffix = WORD_CHARS + '*' if word.endswith('*') else ''
    return prefix + body + suffix


def build_pattern(blocked_words: Iterable[str]):
    words = {normalize_text(w).strip() for w in blocked_words}
    words = sorted((w for w in words if w.strip('*')), key=len, reverse=True)
    if not words:
        return None
    alternatives = '|'.join(_entry_pattern(w) for w in words)
    return re.compile(f'(?<!{WORD_CHARS})(?:{alternatives})(?!{WORD_CHARS})')


def contains_profanity(text: str, blocked_words: Iterable[str]) -> bool:
    if not text:
        return False
    pattern = build_pattern(blocked_words)
    if pattern is None:
        return False
    return pattern.search(normalize_text(text)) is not None


def filter_profanity(text: str, blocked_words: Iterable[str]) -> Dict[str, bool]:
    """Returns dict with clean and flagged, for routing text to moderation."""
    flagged = contains_profanity(text, blocked_words)
    return {'clean': not flagged, 'flagged': flagged}
