"""Query keyword extraction and the heuristic keyword relevance score."""

import re

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "from", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do",
        "does", "did", "will", "would", "could", "should", "may", "might", "must", "can", "this",
        "that", "these", "those", "it", "its", "what", "which", "who", "how", "why", "when",
        "where", "if", "then", "so", "as", "just", "about", "into", "out", "up", "down", "any",
        "all", "each", "every", "some", "such", "no", "not", "only", "own", "same", "than", "too",
        "very", "i", "me", "my", "you", "your", "we", "our", "they", "their",
    }
)

MAX_COUNTED_OCCURRENCES = 5
LEAD_WINDOW = 100
LEAD_BONUS = 0.5

_PUNCTUATION = re.compile(r"[^\w\s]")


def extract_keywords(query: str) -> list[str]:
    """Lower-case, turn punctuation into spaces, split; keep tokens longer than 2 chars that are not stop words."""
    words = _PUNCTUATION.sub(" ", query.lower()).split()
    return [w for w in words if len(w) > 2 and w not in STOP_WORDS]


def calculate_keyword_score(content: str, keywords: list[str]) -> float:
    """
    Sum over keywords of min(whole-word occurrences, 5) / len(keywords), plus 0.5 for each
    keyword that appears in the first 100 characters. Case-insensitive.
    """
    if not keywords:
        return 0.0
    lower = content.lower()
    lead = lower[:LEAD_WINDOW]
    weight = 1 / len(keywords)
    score = 0.0
    for keyword in keywords:
        count = len(re.findall(rf"\b{re.escape(keyword)}\b", lower))
        score += min(count, MAX_COUNTED_OCCURRENCES) * weight
        if keyword in lead:
            score += LEAD_BONUS
    return score
