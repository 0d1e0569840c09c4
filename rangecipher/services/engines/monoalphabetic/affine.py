import math
import random
from dataclasses import dataclass
from typing import Any, ClassVar

from rangecipher.core.exceptions import InvalidKeyError
from rangecipher.models.schemas import CipherType
from rangecipher.services.engines.base import (
    CipherEngine,
    CipherKey,
    DecryptionResult,
    key_integer,
)
from rangecipher.services.engines.registry import EngineRegistry
from rangecipher.services.engines.substitution import (
    Mapper,
    RangeSpec,
    TransformRule,
    substitute,
)

ALPHABET_SIZE = 26

# Multipliers coprime with 26 and their inverses mod 26
MODULAR_INVERSES: dict[int, int] = {
    1: 1,
    3: 9,
    5: 21,
    7: 15,
    9: 3,
    11: 19,
    15: 7,
    17: 23,
    19: 11,
    21: 5,
    23: 17,
    25: 25,
}


@dataclass(frozen=True)
class AffineKey:
    """
    Affine key (a, b) for E(x) = (ax + b) mod 26.

    `a` must be one of the multipliers in MODULAR_INVERSES, `b` in [0, 26).
    """

    a: int
    b: int

    def __post_init__(self) -> None:
        for field in ("a", "b"):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidKeyError(
                    f"Invalid '{field}' value: {value!r}. Must be an integer.",
                    {field: repr(value)},
                )
        if self.a not in MODULAR_INVERSES:
            raise InvalidKeyError(
                f"Invalid 'a' value: {self.a}. Must be coprime with {ALPHABET_SIZE}.",
                {"a": self.a, "valid_a": list(MODULAR_INVERSES)},
            )
        if not 0 <= self.b < ALPHABET_SIZE:
            raise InvalidKeyError(
                f"Invalid 'b' value: {self.b}. Must be in [0, {ALPHABET_SIZE}).",
                {"b": self.b},
            )

    @property
    def a_inverse(self) -> int:
        return MODULAR_INVERSES[self.a]

    def inverse_for(self, width: int) -> int:
        """
        Modular inverse of `a` for a range of the given width.

        Raises:
            InvalidKeyError: If `a` is not invertible modulo `width`
        """
        if width == ALPHABET_SIZE:
            return self.a_inverse
        self.check_width(width)
        return pow(self.a, -1, width)

    def check_width(self, width: int) -> None:
        if math.gcd(self.a, width) != 1:
            raise InvalidKeyError(
                f"'a' value {self.a} is not coprime with range width {width}",
                {"a": self.a, "width": width},
            )


def encryption_rule(key: AffineKey) -> TransformRule:
    """Transform rule for E(x) = (ax + b) mod w."""

    def rule(low: int, high: int) -> Mapper:
        width = high - low + 1
        key.check_width(width)
        return lambda code_point: (key.a * (code_point - low) + key.b) % width + low

    return rule


def decryption_rule(key: AffineKey) -> TransformRule:
    """Transform rule for D(y) = a^(-1) * (y - b) mod w."""

    def rule(low: int, high: int) -> Mapper:
        width = high - low + 1
        a_inv = key.inverse_for(width)
        return lambda code_point: (a_inv * (code_point - low) - a_inv * key.b) % width + low

    return rule


def encrypt(text: str, a: int, b: int, ranges: RangeSpec = None) -> str:
    """
    Encrypt `text` with the affine map x -> (ax + b) within each range.

    Raises:
        InvalidKeyError: If `a` is not coprime with 26 or `b` is out of range
    """
    return substitute(text, encryption_rule(AffineKey(a, b)), ranges)


def decrypt(ciphertext: str, a: int, b: int, ranges: RangeSpec = None) -> str:
    """Decrypt text produced by `encrypt` with the same key and ranges."""
    return substitute(ciphertext, decryption_rule(AffineKey(a, b)), ranges)


@EngineRegistry.register
class AffineEngine(CipherEngine):
    """
    Affine cipher engine.

    The Affine cipher encrypts using the formula: E(x) = (ax + b) mod 26
    where 'a' must be coprime with 26 (valid values: 1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25).

    Decryption uses: D(y) = a^(-1) * (y - b) mod 26
    where a^(-1) is the modular multiplicative inverse of a mod 26.
    """

    name = "Affine Cipher"
    cipher_type = CipherType.AFFINE
    description = (
        "A monoalphabetic substitution cipher using the formula E(x) = (ax + b) mod 26. "
        "Combines multiplicative and additive shifts. "
        "The 'a' value must be coprime with 26."
    )

    VALID_A: ClassVar[list[int]] = list(MODULAR_INVERSES)

    def encrypt(
        self,
        plaintext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> str:
        """Encrypt using E(x) = (ax + b) mod 26."""
        affine_key = self._parse_key(key)
        return encrypt(plaintext, affine_key.a, affine_key.b, ranges)

    def decrypt_with_key(
        self,
        ciphertext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> DecryptionResult:
        """Decrypt with known (a, b) values."""
        affine_key = self._parse_key(key)
        plaintext = decrypt(ciphertext, affine_key.a, affine_key.b, ranges)

        return DecryptionResult(
            plaintext=plaintext,
            key={"a": affine_key.a, "b": affine_key.b},
            explanation=self.explain(ciphertext, plaintext, key, ranges),
        )

    def generate_random_key(self) -> dict[str, int]:
        """Generate random valid (a, b) values."""
        a = random.choice(self.VALID_A)
        b = random.randint(0, ALPHABET_SIZE - 1)
        return {"a": a, "b": b}

    def validate_key(self, key: CipherKey) -> bool:
        """Validate that key contains valid (a, b) values."""
        try:
            self._parse_key(key)
            return True
        except InvalidKeyError:
            return False

    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> str:
        """Generate human-readable explanation."""
        affine_key = self._parse_key(key)
        a, b = affine_key.a, affine_key.b

        return (
            f"Affine cipher with a={a} and b={b}. "
            f"Encryption formula: E(x) = ({a}x + {b}) mod 26. "
            f"Decryption uses the modular inverse of {a}, which is {affine_key.a_inverse}. "
            f"Each letter position is multiplied by {a}, then {b} is added."
        )

    def normalize_key(self, key: CipherKey) -> dict[str, Any]:
        affine_key = self._parse_key(key)
        return {"a": affine_key.a, "b": affine_key.b}

    def _parse_key(self, key: CipherKey) -> AffineKey:
        """Parse key to an AffineKey."""
        if isinstance(key, dict):
            if "a" not in key:
                raise InvalidKeyError(f"Invalid key: {key!r}", {"key": repr(key)})
            a = key_integer(key["a"], "a")
            b = key_integer(key.get("b", 0), "b")
        elif isinstance(key, str):
            # "a,b" format
            parts = key.replace(" ", "").split(",")
            if len(parts) != 2:
                raise InvalidKeyError(f"Invalid key format: {key}", {"key": key})
            a, b = key_integer(parts[0], "a"), key_integer(parts[1], "b")
        elif isinstance(key, (list, tuple)) and len(key) == 2:
            a, b = key_integer(key[0], "a"), key_integer(key[1], "b")
        else:
            raise InvalidKeyError(f"Invalid key type: {type(key).__name__}")

        return AffineKey(a, b)
