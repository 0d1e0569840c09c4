from typing import Annotated

from fastapi import Depends

from rangecipher.core.config import Settings, get_settings
from rangecipher.services.engines.registry import EngineRegistry


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_registry() -> EngineRegistry:
    """Get engine registry."""
    return EngineRegistry()


RegistryDep = Annotated[EngineRegistry, Depends(get_registry)]
