from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================


class CipherType(str, Enum):
    """Specific cipher types."""

    CAESAR = "caesar"
    AFFINE = "affine"
    ATBASH = "atbash"


# ============================================================================
# Range Schemas
# ============================================================================


class RangeInfo(BaseModel):
    """An inclusive code point range a cipher was applied to."""

    model_config = ConfigDict(from_attributes=True)

    low: int = Field(ge=0)
    high: int = Field(ge=0)


# Either a string of boundary characters ("azAZ") or a list of boundaries,
# each a code point or a single character.
RangeBoundaries = str | list[int | str]


# ============================================================================
# Request Schemas
# ============================================================================


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: int | str | dict[str, Any] | None = None
    ranges: RangeBoundaries | None = None


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: int | str | dict[str, Any] | None = None
    ranges: RangeBoundaries | None = None


# ============================================================================
# Response Schemas
# ============================================================================


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    cipher_type: CipherType
    key_used: str | dict[str, Any]
    ranges: list[RangeInfo]


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    cipher_type: CipherType
    key_used: str | dict[str, Any]
    ranges: list[RangeInfo]
    explanation: str


class CipherInfo(BaseModel):
    """Description of a registered cipher."""

    cipher_type: CipherType
    name: str
    description: str
    keyed: bool
    self_reciprocal: bool


class CipherListResponse(BaseModel):
    """Response schema for /ciphers endpoint."""

    ciphers: list[CipherInfo]


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
