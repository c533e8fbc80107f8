"""Reading plain-text files with encoding detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import chardet

log = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".text"}

FALLBACK_ENCODINGS = ("utf-8", "utf-8-sig", "gb18030", "gbk", "big5")


@dataclass(frozen=True)
class LoadedText:
    path: str
    display_name: str
    content: str


def decode_bytes(raw: bytes) -> tuple[str, str]:
    """Decode ``raw`` and return ``(text, encoding)``.

    chardet's guess is tried first, then common encodings for Chinese and
    Western text. latin-1 always succeeds and is the last resort.
    """
    candidates: list[str] = []
    guess = chardet.detect(raw).get("encoding")
    if guess:
        guess = guess.lower()
        # ascii is a subset of utf-8; prefer the latter
        candidates.append("utf-8" if guess == "ascii" else guess)
    candidates.extend(FALLBACK_ENCODINGS)

    tried: set[str] = set()
    for encoding in candidates:
        if encoding in tried:
            continue
        tried.add(encoding)
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            continue
    return raw.decode("latin-1"), "latin-1"


def load_text_file(path: Union[str, Path]) -> Optional[LoadedText]:
    """Read and decode a text file. Returns None for a path that is not a file."""
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        log.info("Nothing to open at %s", file_path)
        return None
    raw = file_path.read_bytes()
    text, encoding = decode_bytes(raw)
    if text.startswith("\ufeff"):
        text = text[1:]
    log.info("Read %s (%d bytes, %s)", file_path, len(raw), encoding)
    resolved = file_path.resolve()
    return LoadedText(path=str(resolved), display_name=resolved.name, content=text)
