from fastapi import APIRouter, Request

import config
from core_logic import logger, ValidationException, ServiceUnavailableException
from encoding import decode_id, encode_id, get_obfuscator
from limiter import limiter
from models import BatchEncodePayload, BatchEncodeResponse, CodeResponse, ErrorResponse, HealthResponse, IdResponse
from obfuscation import ConfigurationError, InvalidInput

# --- Router Setup ---

api_router = APIRouter(
    prefix="/api/v1",
    tags=["Codes"],
)

service_router = APIRouter(
    tags=["Monitoring"],
)

# --- Service Routes ---

@service_router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check():
    """Confirms the obfuscator can be built from the current configuration."""
    try:
        obfuscator = get_obfuscator()
    except ConfigurationError as e:
        logger.error(f"Health check failed: {e}")
        raise ServiceUnavailableException()
    return {"status": "healthy", "code_length": obfuscator.length}

# --- API Routes ---

@api_router.get(
    "/ids/{id}/code",
    response_model=CodeResponse,
    summary="Encode an ID",
    responses={400: {"model": ErrorResponse, "description": "Bad Request: the ID is negative."}}
)
@limiter.limit(config.RATE_LIMIT_ENCODE)
async def encode_single_id(id: int, request: Request):
    """Returns the obfuscated code for a single ID."""
    try:
        code = encode_id(id)
    except InvalidInput as e:
        raise ValidationException(str(e))
    return {"id": id, "code": code}


@api_router.post(
    "/codes",
    response_model=BatchEncodeResponse,
    summary="Encode several IDs",
    responses={400: {"model": ErrorResponse, "description": "Bad Request: one of the IDs is negative."}}
)
@limiter.limit(config.RATE_LIMIT_ENCODE)
async def encode_batch(payload: BatchEncodePayload, request: Request):
    """Returns the obfuscated codes for a list of IDs, in request order."""
    try:
        codes = [{"id": n, "code": encode_id(n)} for n in payload.ids]
    except InvalidInput as e:
        raise ValidationException(str(e))
    return {"codes": codes}


@api_router.get(
    "/codes/{code}/id",
    response_model=IdResponse,
    summary="Decode a code",
    responses={400: {"model": ErrorResponse, "description": "Bad Request: the code is too short or out of range."}}
)
@limiter.limit(config.RATE_LIMIT_DECODE)
async def decode_single_code(code: str, request: Request):
    """
    Returns the ID behind a code. Separators such as dashes are ignored.
    A code made with other parameters decodes to an unrelated ID.
    """
    try:
        id_ = decode_id(code)
    except InvalidInput as e:
        logger.info(f"Rejected code: {e}")
        raise ValidationException(str(e))
    return {"code": code, "id": id_}
