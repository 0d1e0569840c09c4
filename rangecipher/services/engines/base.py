from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from rangecipher.core.exceptions import InvalidKeyError
from rangecipher.models.schemas import CipherType
from rangecipher.services.engines.substitution import RangeSpec, parse_ranges

CipherKey = str | int | dict[str, Any]


def key_integer(value: Any, field: str = "key") -> int:
    """
    Read one integer key component.

    Only ints and integer strings are accepted; floats and bools are
    rejected rather than truncated.

    Raises:
        InvalidKeyError: If the value is not an integer
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidKeyError(
        f"Invalid {field}: {value!r}. Must be an integer.",
        {field: repr(value)},
    )


def first_example(
    ciphertext: str,
    plaintext: str,
    ranges: RangeSpec = None,
) -> tuple[str, str] | None:
    """First aligned character pair whose ciphertext character lies in a range."""
    parsed = parse_ranges(ranges)
    for cipher_char, plain_char in zip(ciphertext, plaintext):
        if any(ord(cipher_char) in code_point_range for code_point_range in parsed):
            return cipher_char, plain_char
    return None


@dataclass
class DecryptionResult:
    """Result of a decryption operation."""

    plaintext: str
    key: str | dict[str, Any]
    explanation: str


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    Engines adapt the loosely typed keys of the HTTP layer to the pure
    cipher functions. Each cipher implementation must provide:
    - encrypt(): Encrypt plaintext
    - decrypt_with_key(): Decrypt with a known key
    - generate_random_key(): Produce a valid key
    - validate_key(): Check a key without raising
    - explain(): Generate human-readable explanation
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType
    description: str
    keyed: bool = True
    self_reciprocal: bool = False

    @abstractmethod
    def encrypt(
        self,
        plaintext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> str:
        """
        Encrypt plaintext with the given key.

        Args:
            plaintext: The plaintext to encrypt
            key: The encryption key
            ranges: Range boundaries to encrypt within (default a-z, A-Z)

        Returns:
            Ciphertext
        """
        pass

    @abstractmethod
    def decrypt_with_key(
        self,
        ciphertext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> DecryptionResult:
        """
        Decrypt with a known key.

        Args:
            ciphertext: The ciphertext to decrypt
            key: The key used for encryption
            ranges: Range boundaries used for encryption

        Returns:
            DecryptionResult with plaintext and metadata
        """
        pass

    @abstractmethod
    def generate_random_key(self) -> str | dict[str, Any]:
        """Generate a random valid key for this cipher."""
        pass

    @abstractmethod
    def validate_key(self, key: CipherKey) -> bool:
        """
        Validate that a key is valid for this cipher.

        Args:
            key: The key to validate

        Returns:
            True if key is valid
        """
        pass

    @abstractmethod
    def explain(
        self,
        ciphertext: str,
        plaintext: str,
        key: CipherKey,
        ranges: RangeSpec = None,
    ) -> str:
        """
        Generate human-readable explanation of the decryption.

        Args:
            ciphertext: The ciphertext
            plaintext: The decrypted plaintext
            key: The key used
            ranges: Ranges the cipher was applied to

        Returns:
            Explanation string
        """
        pass

    def normalize_key(self, key: CipherKey) -> str | dict[str, Any]:
        """Return the key in the form reported back to API clients."""
        return key if isinstance(key, (str, dict)) else str(key)
