"""Endpoints del workspace service.

Responsabilidad única: manejar HTTP requests/responses.
"""

import asyncio
import logging
from functools import partial
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException

from .. import __version__
from ..config import Settings, get_settings
from ..domain.errors import ParseCancelledError
from ..domain.results import FragmentResult
from ..schemas import FragmentReq, FragmentResp
from ..services.fragment_parser import FragmentParser, get_fragment_parser


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="",
    responses={
        500: {"description": "Internal server error"},
    },
)


@router.post("/fragment", response_model=FragmentResp, tags=["fragments"])
async def parse_fragment(
    req: FragmentReq,
    parser: FragmentParser = Depends(get_fragment_parser),
    settings: Settings = Depends(get_settings),
) -> FragmentResp:
    """Parsea un fragmento como si fuera un documento independiente.

    Los errores del fragmento (tipo desconocido, sintaxis, extracción) se
    devuelven en el cuerpo con HTTP 200; solo los fallos internos producen
    un 500.

    Args:
        req: Tipo esperado y texto del fragmento

    Returns:
        FragmentResp con ok=<nodo> si éxito, error=<detalle> si fallo
    """
    try:
        loop = asyncio.get_running_loop()
        result = await asyncio.wait_for(
            loop.run_in_executor(None, partial(parser.parse_fragment, req.expected_node_type, req.source)),
            timeout=settings.PARSE_TIMEOUT,
        )

    except asyncio.TimeoutError:
        # El hilo del parser sigue hasta terminar, pero su árbol se descarta
        logger.warning("Fragment parsing exceeded %.1fs, request cancelled", settings.PARSE_TIMEOUT)
        result = FragmentResult.failure(
            ParseCancelledError(f"parsing exceeded the {settings.PARSE_TIMEOUT:g}s timeout")
        )

    except Exception as e:
        logger.exception("Unexpected error while parsing fragment")
        raise HTTPException(status_code=500, detail=f"internal-error: {e}")

    return FragmentResp.from_result(result)


@router.get("/health", tags=["health"])
def health(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    """Endpoint de salud del servicio."""
    return {
        "status": "ok",
        "service": settings.APP_NAME,
        "version": __version__,
    }
