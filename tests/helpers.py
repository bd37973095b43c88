from __future__ import annotations


def fake_is_profane(text: str) -> bool:
    return "darn" in text.lower()
