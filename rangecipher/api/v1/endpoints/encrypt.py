import logging

from fastapi import APIRouter

from rangecipher.core.exceptions import TextTooLongError
from rangecipher.dependencies import RegistryDep, SettingsDep
from rangecipher.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse, RangeInfo
from rangecipher.services.engines.substitution import parse_ranges

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid key, ranges or input"},
        404: {"model": ErrorResponse, "description": "Cipher type not supported"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext using a specified cipher type over the given code point ranges.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
    registry: RegistryDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a specified cipher type.

    A random key is generated when none is provided. Characters outside
    the requested ranges (default a-z and A-Z) are returned unchanged.
    """
    if len(request.plaintext) > settings.max_text_length:
        raise TextTooLongError(len(request.plaintext), settings.max_text_length)

    engine = registry.require_engine(request.cipher_type)

    ranges = parse_ranges(
        request.ranges if request.ranges is not None else settings.default_ranges
    )

    key = request.key
    if key is None:
        key = engine.generate_random_key()

    ciphertext = engine.encrypt(request.plaintext, key, ranges)
    logger.debug(
        "Encrypted %d characters with %s over %d ranges",
        len(request.plaintext),
        request.cipher_type.value,
        len(ranges),
    )

    return EncryptResponse(
        ciphertext=ciphertext,
        cipher_type=request.cipher_type,
        key_used=engine.normalize_key(key),
        ranges=[RangeInfo.model_validate(r) for r in ranges],
    )
