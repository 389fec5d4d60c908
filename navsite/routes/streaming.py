# navsite/routes/streaming.py
from fastapi import APIRouter
from fastapi.responses import Response
import logging

from navsite.config.settings import settings
from navsite.services.streaming import StreamingGate

router = APIRouter(prefix=f"{settings.path_base}/streaming", tags=["streaming"])
logger = logging.getLogger(__name__)


@router.post("/end", status_code=204, summary="Finalizar la respuesta en streaming")
async def end_streaming_response():
    """
    Libera la página de streaming abierta.

    Las pruebas deben llamarlo antes de apagar el servidor; de lo contrario la
    conexión queda abierta hasta ``streaming_max_wait``.
    """
    logger.info("Solicitud de fin de streaming recibida")
    StreamingGate.end_response()
    return Response(status_code=204)
