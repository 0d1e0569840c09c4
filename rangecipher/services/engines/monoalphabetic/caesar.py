import random

from rangecipher.core.exceptions import InvalidKeyError
from rangecipher.models.schemas import CipherType
from rangecipher.services.engines.base import (
    CipherEngine,
    CipherKey,
    DecryptionResult,
    first_example,
    key_integer,
)
from rangecipher.services.engines.registry import EngineRegistry
from rangecipher.services.engines.substitution import (
    Mapper,
    RangeSpec,
    TransformRule,
    substitute,
)


def shift_rule(shift: int) -> TransformRule:
    """
    Transform rule moving each code point `shift` places along its range.

    Shifts wrap around, so any integer is accepted: with a 26 wide range a
    shift of 27 behaves like 1 and -1 like 25.
    """
    shift = key_integer(shift, "shift")

    def rule(low: int, high: int) -> Mapper:
        width = high - low + 1
        return lambda code_point: (code_point - low + shift) % width + low

    return rule


def encrypt(text: str, shift: int, ranges: RangeSpec = None) -> str:
    """
    Shift every letter of `text` by `shift` positions.

    Only code points inside `ranges` (a-z and A-Z by default) move; everything
    else is left as-is. Text encrypted with `shift` is decrypted with `-shift`.

        >>> encrypt("Palindrome", 2)
        'Rcnkpftqog'
    """
    return substitute(text, shift_rule(shift), ranges)


def decrypt(ciphertext: str, shift: int, ranges: RangeSpec = None) -> str:
    """Reverse `encrypt` by shifting the other way."""
    return encrypt(ciphertext, -shift, ranges)


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount within its range, wrapping around at the end.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    def encrypt(
        self,
        plaintext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> str:
        """Encrypt plaintext with the given shift."""
        return encrypt(plaintext, self._parse_key(key), ranges)

    def decrypt_with_key(
        self,
        ciphertext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> DecryptionResult:
        """Decrypt with a known shift value."""
        shift = self._parse_key(key)
        plaintext = decrypt(ciphertext, shift, ranges)

        return DecryptionResult(
            plaintext=plaintext,
            key=str(shift),
            explanation=self.explain(ciphertext, plaintext, shift, ranges),
        )

    def generate_random_key(self) -> str:
        """Generate a random shift (1-25, excluding 0 and 26)."""
        return str(random.randint(1, 25))

    def validate_key(self, key: CipherKey) -> bool:
        """Any integer is a valid shift."""
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
        shift = self._parse_key(key)
        explanation = (
            f"Caesar cipher with shift of {shift}. "
            f"Each letter was shifted back {shift} positions within its range."
        )

        example = first_example(ciphertext, plaintext, ranges)
        if example is not None:
            explanation += f" For example, '{example[0]}' becomes '{example[1]}'."

        return explanation

    def _parse_key(self, key: CipherKey) -> int:
        """Parse key to integer shift value."""
        if isinstance(key, dict):
            key = key.get("shift", key.get("key"))
        return key_integer(key, "shift")
