"""Monoalphabetic cipher engines."""

from rangecipher.services.engines.monoalphabetic.caesar import CaesarEngine
from rangecipher.services.engines.monoalphabetic.atbash import AtbashEngine
from rangecipher.services.engines.monoalphabetic.affine import AffineEngine

__all__ = [
    "CaesarEngine",
    "AtbashEngine",
    "AffineEngine",
]
