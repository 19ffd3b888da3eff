"""
Translation module - Core translation functionality

This module provides:
- Value types shared by providers and the resolver
- Validation of raw provider output
- Chunked fallback and the static phrase dictionary

The cascade itself lives in translation.resolver, which depends on the
provider adapters and is imported from there directly.
"""

from traveltalk.translation.models import (
    ProviderKind,
    RejectReason,
    TranslationRequest,
    TranslationCandidate,
    TranslationResult,
    ValidationVerdict,
)
from traveltalk.translation.exceptions import (
    TranslationError,
    EmptyInputError,
    ProviderError,
    ProviderUnreachableError,
    ProviderRejectedError,
    ResolutionExhaustedError,
)
from traveltalk.translation.validator import (
    validate_candidate,
    pick_valid_translation,
    VALIDATION_STEPS,
)
from traveltalk.translation.chunking import (
    split_into_sentences,
    translate_by_chunks,
)
