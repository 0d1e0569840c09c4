from fastapi import APIRouter

from rangecipher.dependencies import RegistryDep
from rangecipher.models.schemas import CipherInfo, CipherListResponse

router = APIRouter()


@router.get(
    "",
    response_model=CipherListResponse,
    summary="List ciphers",
    description="List the cipher types this service can encrypt and decrypt.",
)
async def list_ciphers(registry: RegistryDep) -> CipherListResponse:
    """List all registered cipher engines."""
    return CipherListResponse(
        ciphers=[
            CipherInfo(
                cipher_type=engine.cipher_type,
                name=engine.name,
                description=engine.description,
                keyed=engine.keyed,
                self_reciprocal=engine.self_reciprocal,
            )
            for engine in registry.get_all_engines()
        ]
    )
