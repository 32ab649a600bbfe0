"""
utils/text_utils.py

Purpose: Text helpers

- Brand normalization for AI provider output
- Text tools used by the /count, /reverse, /title, /encode, /decode commands
"""

import base64
import binascii
import re
from typing import Dict


def _with_terminator(name: str, terminator: str) -> str:
    # "Ltd." followed by "." must not become "Ltd.."
    if name.endswith(terminator):
        return name
    return f"{name}{terminator}"


def normalize_branding(text: str, bot_name: str, company: str) -> str:
    """
    Rewrites competing assistant/provider names to our own branding.

    Applying it twice gives the same result as applying it once, as long
    as bot_name and company do not themselves contain a competitor name.

    Args:
        text: Raw provider output
        bot_name: Assistant name (e.g. "Cool Shot AI")
        company: Company name (e.g. "Cool Shot Systems")

    Returns:
        Normalized, stripped text
    """
    if not text:
        return ""

    # Sentence-level rewrites run before the bare-name replacements so
    # "created by Google." still matches as a phrase.
    text = re.sub(
        r"I['’`]?m an AI (?:language model|assistant)",
        lambda m: f"I'm {bot_name}, your intelligent assistant",
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(
        rf"I was (created|developed|made|built) by (?!{re.escape(company)})[^.\n]*?([.\n])",
        lambda m: f"I was {m.group(1)} by {_with_terminator(company, m.group(2))}",
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(r"Cool Shot Designs/Tech", lambda m: company, text, flags=re.IGNORECASE)
    text = re.sub(r"Google['’]?s? AI|Gemini AI", lambda m: bot_name, text, flags=re.IGNORECASE)
    text = re.sub(
        r"Prof-Tech MVAI|Gifted\s*AI|ChatGPT|GiftedTech|OpenAI",
        lambda m: bot_name,
        text,
        flags=re.IGNORECASE,
    )
    text = re.sub(r"\b(?:Google|Gemini|Bard)\b", lambda m: bot_name, text, flags=re.IGNORECASE)
    text = re.sub(r"I['’]?m here to help", lambda m: f"I'm {bot_name}, here to help", text, flags=re.IGNORECASE)
    text = re.sub(r"[“”]", '"', text)

    return text.strip()


def count_text(text: str) -> Dict[str, int]:
    stripped = text.strip()
    return {
        "words": len(stripped.split()) if stripped else 0,
        "chars": len(text),
        "chars_no_spaces": len(re.sub(r"\s", "", text)),
    }


def reverse_text(text: str) -> str:
    return text[::-1]


def title_case(text: str) -> str:
    """Capitalizes each \\w\\S* word and lowercases the rest of it."""
    return re.sub(r"\w\S*", lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def encode_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_base64(text: str) -> str:
    """
    Raises:
        ValueError: If the input is not valid Base64 or not UTF-8 once decoded
    """
    try:
        return base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Invalid Base64 input: {e}") from e
