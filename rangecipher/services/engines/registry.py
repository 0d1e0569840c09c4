from typing import Type

from rangecipher.core.exceptions import EngineNotFoundError
from rangecipher.models.schemas import CipherType
from rangecipher.services.engines.base import CipherEngine


class EngineRegistry:
    """
    Cipher engines keyed by cipher type.

    Engine classes register themselves with the decorator; instances are
    created on first lookup and shared afterwards.
    """

    _engines: dict[CipherType, Type[CipherEngine]] = {}
    _instances: dict[CipherType, CipherEngine] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """Class decorator adding an engine under its cipher_type."""
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def get_engine(self, cipher_type: CipherType) -> CipherEngine | None:
        """Return the shared engine for a cipher type, or None if unknown."""
        engine_class = self._engines.get(cipher_type)
        if engine_class is None:
            return None
        if cipher_type not in self._instances:
            self._instances[cipher_type] = engine_class()
        return self._instances[cipher_type]

    def require_engine(self, cipher_type: CipherType) -> CipherEngine:
        """
        Like get_engine, but an unknown cipher type is an error.

        Raises:
            EngineNotFoundError: If no engine is registered for the type
        """
        engine = self.get_engine(cipher_type)
        if engine is None:
            raise EngineNotFoundError(str(getattr(cipher_type, "value", cipher_type)))
        return engine

    def get_all_engines(self) -> list[CipherEngine]:
        """Engines for every registered cipher type, in registration order."""
        return [self.require_engine(cipher_type) for cipher_type in self._engines]


def _load_engines() -> None:
    """Import the cipher modules so their engines register."""
    from rangecipher.services.engines.monoalphabetic import affine, atbash, caesar  # noqa: F401


_load_engines()
