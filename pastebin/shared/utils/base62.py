# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Base-62 codec for the public short identifiers of pastes."""

from __future__ import annotations

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)
MAX_UINT64 = 2**64 - 1

_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def encode(number: int) -> str:
    """Encode an unsigned 64-bit integer, ``0`` becomes ``"0"``."""

    if number < 0 or number > MAX_UINT64:
        raise ValueError(f"value out of uint64 range: {number}")
    if number == 0:
        return ALPHABET[0]

    digits: list[str] = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def decode(value: str) -> int | None:
    """Return the number encoded in ``value`` or ``None`` when malformed."""

    # leading zeros would give one paste several short ids
    if not value or (len(value) > 1 and value[0] == ALPHABET[0]):
        return None

    number = 0
    for char in value:
        digit = _INDEX.get(char)
        if digit is None:
            return None
        number = number * BASE + digit
        if number > MAX_UINT64:
            return None
    return number


__all__ = ["ALPHABET", "MAX_UINT64", "decode", "encode"]
