"""Token counting for chunk payloads. Uses tiktoken (cl100k_base, the OpenAI embedding encoding)."""

import tiktoken

from hybrid_rag.config.logging import get_logger

logger = get_logger(__name__)

_ENCODING_NAME = "cl100k_base"
_encoding: tiktoken.Encoding | None = None
_encoding_failed = False


def _get_encoding() -> tiktoken.Encoding | None:
    """Lazy-load the encoding. Loading fetches BPE ranks on first use and can fail offline."""
    global _encoding, _encoding_failed
    if _encoding is None and not _encoding_failed:
        try:
            _encoding = tiktoken.get_encoding(_ENCODING_NAME)
        except Exception as e:
            _encoding_failed = True
            logger.warning(
                "tiktoken encoding unavailable, token counts will be estimated",
                extra={"encoding": _ENCODING_NAME, "error": str(e)},
            )
    return _encoding


def count_tokens(text: str) -> int:
    """Return the token count for text; roughly 4 chars per token when the encoding cannot load."""
    if not text:
        return 0
    enc = _get_encoding()
    if enc is not None:
        return len(enc.encode(text, disallowed_special=()))
    return max(1, len(text) // 4)
