"""
Text Preprocessing for TTS input.

Deterministic clean-up applied to request text before it is forwarded to a
vendor. All functions are pure (same input = same output).

Features:
- Punctuation normalization (smart quotes to ASCII)
- Control character removal
- Whitespace normalization
"""

import re

# Punctuation replacement mapping
PUNCTUATION_MAP: dict[str, str] = {
    # Smart quotes
    "\u201c": '"',  # Left double quote
    "\u201d": '"',  # Right double quote
    "\u2018": "'",  # Left single quote
    "\u2019": "'",  # Right single quote
    # Dashes
    "\u2014": "--",  # Em dash
    "\u2013": "-",  # En dash
    # Other
    "\u2026": "...",  # Ellipsis
    "\u00a0": " ",  # Non-breaking space
}

# C0/C1 control characters except tab, newline and carriage return
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def normalize_punctuation(text: str) -> str:
    """Normalize special punctuation characters to ASCII equivalents.

    Several engines (espeak behind pyttsx3, macOS say) read smart quotes and
    ellipses aloud or stumble on them.

    Args:
        text: Input text with potential special punctuation

    Returns:
        Text with normalized punctuation
    """
    result = text
    for special, replacement in PUNCTUATION_MAP.items():
        result = result.replace(special, replacement)
    return result


def strip_control_characters(text: str) -> str:
    """Remove control characters that vendors reject or pronounce."""
    return CONTROL_CHARS.sub("", text)


def normalize_whitespace(text: str) -> str:
    """Normalize whitespace in text.

    - Replaces tabs and newlines with spaces
    - Replaces multiple spaces with single space
    - Strips leading and trailing whitespace
    """
    result = text.replace("\t", " ").replace("\n", " ").replace("\r", " ")
    result = re.sub(r" +", " ", result)
    return result.strip()


def preprocess_text(text: str) -> str:
    """Complete preprocessing pipeline for TTS input text.

    Applies, in order:
    1. Normalize punctuation (smart quotes, dashes, etc.)
    2. Strip control characters
    3. Normalize whitespace

    Args:
        text: Raw input text

    Returns:
        Preprocessed text ready for synthesis
    """
    if not text:
        return ""

    result = normalize_punctuation(text)
    result = strip_control_characters(result)
    return normalize_whitespace(result)
