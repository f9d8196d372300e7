from __future__ import annotations

from typing import List, Optional

from kgops.errors import ValidationError

# ---------------------------------------------------------------------
# Key layout
#
# A position is an integer part followed by an optional fraction.
# The integer part starts with a head character that encodes its own
# length: "a".."z" are non-negative integers with 1..26 digits,
# "A".."Z" negative ones with 26..1 digits. Digits are base 62 in
# ASCII order, so raw string comparison matches numeric order.
# ---------------------------------------------------------------------

BASE_62_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_ZERO = BASE_62_DIGITS[0]
_SMALLEST_INTEGER = "A" + _ZERO * 26


def _integer_length(head: str) -> int:
    if "a" <= head <= "z":
        return ord(head) - ord("a") + 2
    if "A" <= head <= "Z":
        return ord("Z") - ord(head) + 2
    raise ValidationError("invalid position head", head=head)


def _integer_part(key: str) -> str:
    length = _integer_length(key[0])
    if length > len(key):
        raise ValidationError("invalid position", key=key)
    return key[:length]


def _validate_integer(part: str) -> None:
    if len(part) != _integer_length(part[0]):
        raise ValidationError("invalid integer part of position", part=part)


def validate_position(key: str) -> None:
    """
    Raises ValidationError unless `key` is a well-formed position.
    """
    if not isinstance(key, str) or not key:
        raise ValidationError("position must be a non-empty string", key=key)
    if key == _SMALLEST_INTEGER:
        raise ValidationError("invalid position", key=key)
    bad = [c for c in key if c not in BASE_62_DIGITS]
    if bad:
        raise ValidationError("position has characters outside base 62", key=key)
    integer = _integer_part(key)
    fraction = key[len(integer):]
    if fraction.endswith(_ZERO):
        raise ValidationError("position has a trailing zero", key=key)


def is_valid_position(key: object) -> bool:
    try:
        validate_position(key)  # type: ignore[arg-type]
    except ValidationError:
        return False
    return True


def _midpoint(a: str, b: Optional[str]) -> str:
    """
    Fraction strictly between `a` and `b` (`b=None` is the upper end).

    Both are fraction digit strings without trailing zeros and a < b.
    """
    if b is not None:
        n = 0
        while (a[n] if n < len(a) else _ZERO) == b[n]:
            n += 1
        if n > 0:
            return b[:n] + _midpoint(a[n:], b[n:])

    digit_a = BASE_62_DIGITS.index(a[0]) if a else 0
    digit_b = BASE_62_DIGITS.index(b[0]) if b is not None else len(BASE_62_DIGITS)

    if digit_b - digit_a > 1:
        return BASE_62_DIGITS[(digit_a + digit_b + 1) // 2]

    # adjacent digits
    if b is not None and len(b) > 1:
        return b[0]
    return BASE_62_DIGITS[digit_a] + _midpoint(a[1:], None)


def _increment_integer(part: str) -> Optional[str]:
    _validate_integer(part)
    head, digits = part[0], list(part[1:])

    i = len(digits) - 1
    carry = True
    while carry and i >= 0:
        d = BASE_62_DIGITS.index(digits[i]) + 1
        if d == len(BASE_62_DIGITS):
            digits[i] = _ZERO
        else:
            digits[i] = BASE_62_DIGITS[d]
            carry = False
        i -= 1

    if not carry:
        return head + "".join(digits)
    if head == "Z":
        return "a" + _ZERO
    if head == "z":
        return None
    next_head = chr(ord(head) + 1)
    if next_head > "a":
        digits.append(_ZERO)
    else:
        digits.pop()
    return next_head + "".join(digits)


def _decrement_integer(part: str) -> Optional[str]:
    _validate_integer(part)
    head, digits = part[0], list(part[1:])

    i = len(digits) - 1
    borrow = True
    while borrow and i >= 0:
        d = BASE_62_DIGITS.index(digits[i]) - 1
        if d == -1:
            digits[i] = BASE_62_DIGITS[-1]
        else:
            digits[i] = BASE_62_DIGITS[d]
            borrow = False
        i -= 1

    if not borrow:
        return head + "".join(digits)
    if head == "a":
        return "Z" + BASE_62_DIGITS[-1]
    if head == "A":
        return None
    next_head = chr(ord(head) - 1)
    if next_head < "Z":
        digits.append(BASE_62_DIGITS[-1])
    else:
        digits.pop()
    return next_head + "".join(digits)


def generate_between(lower: Optional[str], upper: Optional[str]) -> str:
    """
    Returns a position strictly between `lower` and `upper`.

    `None` stands for an open end, so `generate_between(None, None)`
    starts a fresh sequence and `generate_between(last, None)` appends.
    Appending only grows the key when its integer part overflows.
    """
    if lower is not None:
        validate_position(lower)
    if upper is not None:
        validate_position(upper)
    if lower is not None and upper is not None and lower >= upper:
        raise ValidationError(
            "lower position must sort before upper", lower=lower, upper=upper
        )

    if lower is None:
        if upper is None:
            return "a" + _ZERO
        integer = _integer_part(upper)
        fraction = upper[len(integer):]
        if integer == _SMALLEST_INTEGER:
            return integer + _midpoint("", fraction)
        if integer < upper:
            return integer
        res = _decrement_integer(integer)
        if res is None:
            raise ValidationError("cannot generate a position before", upper=upper)
        return res

    if upper is None:
        integer = _integer_part(lower)
        fraction = lower[len(integer):]
        res = _increment_integer(integer)
        if res is None:
            return integer + _midpoint(fraction, None)
        return res

    int_lower = _integer_part(lower)
    frac_lower = lower[len(int_lower):]
    int_upper = _integer_part(upper)
    frac_upper = upper[len(int_upper):]

    if int_lower == int_upper:
        return int_lower + _midpoint(frac_lower, frac_upper)

    res = _increment_integer(int_lower)
    if res is None:
        raise ValidationError("cannot generate a position after", lower=lower)
    if res < upper:
        return res
    return int_lower + _midpoint(frac_lower, None)


def generate_n_between(
    lower: Optional[str],
    upper: Optional[str],
    n: int,
) -> List[str]:
    """
    Returns `n` sorted positions strictly between `lower` and `upper`.
    """
    if n < 0:
        raise ValidationError("n must be non-negative", n=n)
    if n == 0:
        return []
    if n == 1:
        return [generate_between(lower, upper)]

    if upper is None:
        keys: List[str] = []
        current = lower
        for _ in range(n):
            current = generate_between(current, None)
            keys.append(current)
        return keys

    if lower is None:
        keys = []
        current = upper
        for _ in range(n):
            current = generate_between(None, current)
            keys.append(current)
        keys.reverse()
        return keys

    mid = n // 2
    pivot = generate_between(lower, upper)
    return [
        *generate_n_between(lower, pivot, mid),
        pivot,
        *generate_n_between(pivot, upper, n - mid - 1),
    ]
