"""
Chunked fallback translation.

When whole-text translation keeps failing, the text is split into
sentence-like segments and each is sent on its own. Segments that still
fail are translated word by word. The fixed pauses keep the request rate
under the providers' per-client limits.
"""

import time
from typing import Callable, List, Optional

from traveltalk.logger import get_logger
from traveltalk.translation.exceptions import ProviderError
from traveltalk.translation.models import TranslationRequest
from traveltalk.translation.validator import pick_valid_translation

logger = get_logger(__name__)

SENTENCE_DELIMITERS = frozenset(".!?\n")

# Segments with this many words or fewer are never split further
MIN_WORDS_FOR_WORD_SPLIT = 3


def split_into_sentences(text: str) -> List[str]:
    """
    Split text after every delimiter, keeping the delimiter and any
    leading whitespace of the next segment.

    Examples:
        >>> split_into_sentences("Hello. How are you? Fine!")
        ['Hello.', ' How are you?', ' Fine!']
        >>> split_into_sentences("no delimiter")
        ['no delimiter']
    """
    result = []
    buffer = ""
    for ch in text:
        buffer += ch
        if ch in SENTENCE_DELIMITERS:
            result.append(buffer)
            buffer = ""
    if buffer.strip():
        result.append(buffer)
    return result


def _translate_piece(provider, request: TranslationRequest, text: str) -> Optional[str]:
    try:
        candidate = provider.attempt_translate(request.with_text(text))
    except ProviderError as e:
        logger.debug(f"Chunk {text[:40]!r} failed: {e}")
        return None
    return pick_valid_translation(text, candidate.raw_text, request.target_language)


def translate_by_chunks(
    request: TranslationRequest,
    provider,
    sleep: Callable[[float], None] = time.sleep,
    segment_pause: float = 0.12,
    word_pause: float = 0.1,
) -> Optional[str]:
    """
    Translate sentence by sentence, then word by word where needed.

    Args:
        request: The whole-text request
        provider: Adapter used for every segment and word
        sleep: Pause function
        segment_pause: Seconds to wait after each segment
        word_pause: Seconds to wait after each word request

    Returns:
        The segments joined with single spaces, or None for empty input.
        Untranslatable pieces are carried over unchanged, so the caller
        still has to validate the result against the original text.
    """
    segments = split_into_sentences(request.text)
    if not segments:
        return None

    out = []
    for segment in segments:
        trimmed = segment.strip()
        if not trimmed:
            continue

        translated = _translate_piece(provider, request, trimmed)
        if translated is not None:
            out.append(translated)
        else:
            words = [w for w in trimmed.split(" ") if w]
            if len(words) < MIN_WORDS_FOR_WORD_SPLIT:
                out.append(trimmed)
            else:
                translated_words = []
                for word in words:
                    translated_word = _translate_piece(provider, request, word)
                    translated_words.append(translated_word if translated_word is not None else word)
                    sleep(word_pause)
                out.append(" ".join(translated_words))

        sleep(segment_pause)

    logger.debug(f"Chunked translation covered {len(out)} segment(s)")
    return " ".join(out)
