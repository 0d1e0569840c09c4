from rangecipher.models.schemas import CipherType
from rangecipher.services.engines.base import (
    CipherEngine,
    CipherKey,
    DecryptionResult,
    first_example,
)
from rangecipher.services.engines.registry import EngineRegistry
from rangecipher.services.engines.substitution import Mapper, RangeSpec, substitute


def reflection_rule(low: int, high: int) -> Mapper:
    """Transform rule mirroring a range: low <-> high, low + 1 <-> high - 1, ..."""
    return lambda code_point: high - (code_point - low)


def encrypt(text: str, ranges: RangeSpec = None) -> str:
    """
    Reverse the alphabet of every range in `text`.

    Self-reciprocal: encrypting twice with the same ranges returns the input.

        >>> encrypt("Hello")
        'Svool'
    """
    return substitute(text, reflection_rule, ranges)


decrypt = encrypt


@EngineRegistry.register
class AtbashEngine(CipherEngine):
    """
    Atbash cipher engine.

    Atbash is a monoalphabetic substitution cipher where the alphabet is reversed:
    A -> Z, B -> Y, C -> X, etc.

    Originally used for the Hebrew alphabet, it's self-reciprocal like ROT13.
    """

    name = "Atbash Cipher"
    cipher_type = CipherType.ATBASH
    description = (
        "A substitution cipher where the alphabet is reversed. "
        "A becomes Z, B becomes Y, etc. "
        "Self-reciprocal: applying twice returns the original text."
    )
    keyed = False
    self_reciprocal = True

    def encrypt(
        self,
        plaintext: str,
        key: CipherKey | None = None,
        ranges: RangeSpec = None,
    ) -> str:
        """Encrypt (same as decrypt for Atbash)."""
        return encrypt(plaintext, ranges)

    def decrypt_with_key(
        self,
        ciphertext: str,
        key: CipherKey | None = None,
        ranges: RangeSpec = None,
    ) -> DecryptionResult:
        """Decrypt (same as encrypt for Atbash)."""
        plaintext = decrypt(ciphertext, ranges)

        return DecryptionResult(
            plaintext=plaintext,
            key="atbash",
            explanation=self.explain(ciphertext, plaintext, "atbash", ranges),
        )

    def generate_random_key(self) -> str:
        """Atbash has no variable key."""
        return "atbash"

    def validate_key(self, key: CipherKey) -> bool:
        """Atbash accepts any key (it's ignored)."""
        return True

    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> str:
        """Generate human-readable explanation."""
        explanation = (
            "Atbash cipher reverses the alphabet of each range. "
            "A becomes Z, B becomes Y, C becomes X, and so on. "
            "This is a fixed substitution with no key required."
        )

        example = first_example(ciphertext, plaintext, ranges)
        if example is not None:
            explanation += f" For example, '{example[0]}' decrypts to '{example[1]}'."

        return explanation

    def normalize_key(self, key: CipherKey | None) -> str:
        return "atbash"
