import logging

from fastapi import APIRouter

from rangecipher.core.exceptions import InvalidKeyError, TextTooLongError
from rangecipher.dependencies import RegistryDep, SettingsDep
from rangecipher.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse, RangeInfo
from rangecipher.services.engines.substitution import parse_ranges

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid key, ranges or input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt ciphertext using a specified cipher type, key and code point ranges.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> DecryptResponse:
    """
    Decrypt ciphertext with a known key.

    The ranges must match the ones used for encryption. Keyless ciphers
    (Atbash) ignore the key.
    """
    if len(request.ciphertext) > settings.max_text_length:
        raise TextTooLongError(len(request.ciphertext), settings.max_text_length)

    engine = registry.require_engine(request.cipher_type)

    if engine.keyed and request.key is None:
        raise InvalidKeyError(
            f"A key is required to decrypt {engine.name}",
            {"cipher_type": request.cipher_type.value},
        )

    ranges = parse_ranges(
        request.ranges if request.ranges is not None else settings.default_ranges
    )

    result = engine.decrypt_with_key(request.ciphertext, request.key, ranges)
    logger.debug(
        "Decrypted %d characters with %s over %d ranges",
        len(request.ciphertext),
        request.cipher_type.value,
        len(ranges),
    )

    return DecryptResponse(
        plaintext=result.plaintext,
        cipher_type=request.cipher_type,
        key_used=result.key,
        ranges=[RangeInfo.model_validate(r) for r in ranges],
        explanation=result.explanation,
    )
