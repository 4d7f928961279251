import logging

from fastapi import APIRouter, Depends

from aboga.api.deps import get_auth_context, get_data_store
from aboga.core.exceptions import AbogaError, NotFoundError
from aboga.core.response_utils import ResponseTimer
from aboga.core.security import AuthContext
from aboga.schemas import ConsultationOutcomeResponse, ConsultationRequest, StandardResponse
from aboga.services.data_store import DataStore
from aboga.services.lawyer_directory import LawyerDirectory

logger = logging.getLogger(__name__)
router = APIRouter()

LAWYER_NOT_FOUND = "Lawyer not found"


@router.get("", response_model=StandardResponse)
async def list_lawyers(
    store: DataStore = Depends(get_data_store),
    auth: AuthContext = Depends(get_auth_context),
):
    """List available lawyers, best rated first."""
    with ResponseTimer() as timer:
        try:
            directory = LawyerDirectory(store, auth)
            return timer.success(await directory.open())

        except AbogaError as e:
            logger.error(f"Error listing lawyers: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error listing lawyers: {e}")
            return timer.error("Failed to list lawyers", 500)


@router.get("/{lawyer_id}", response_model=StandardResponse)
async def get_lawyer(
    lawyer_id: str,
    store: DataStore = Depends(get_data_store),
    auth: AuthContext = Depends(get_auth_context),
):
    """Get the detail of an available lawyer."""
    with ResponseTimer() as timer:
        try:
            directory = LawyerDirectory(store, auth)
            await directory.open()
            return timer.success(directory.select(lawyer_id))

        except NotFoundError:
            return timer.error(LAWYER_NOT_FOUND, 404)
        except AbogaError as e:
            logger.error(f"Error getting lawyer {lawyer_id}: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error getting lawyer {lawyer_id}: {e}")
            return timer.error("Failed to get lawyer", 500)


@router.post("/{lawyer_id}/consultations", response_model=StandardResponse)
async def request_consultation(
    lawyer_id: str,
    request: ConsultationRequest,
    store: DataStore = Depends(get_data_store),
    auth: AuthContext = Depends(get_auth_context),
):
    """Request a consultation with a lawyer."""
    with ResponseTimer() as timer:
        try:
            lawyer = await store.get_lawyer(lawyer_id)
            if lawyer is None or not lawyer.available:
                return timer.error(LAWYER_NOT_FOUND, 404)

            directory = LawyerDirectory(store, auth)
            outcome = await directory.request_consultation(
                lawyer=lawyer,
                chat_session_id=request.chat_session_id,
                notes=request.notes,
            )

            if outcome.blocked:
                return timer.error(outcome.message, 401)
            if not outcome.success:
                return timer.error(outcome.message, 500)

            return timer.success(
                ConsultationOutcomeResponse(
                    success=True,
                    message=outcome.message,
                    consultation=outcome.consultation,
                ),
                status_code=201,
            )

        except AbogaError as e:
            logger.error(f"Error requesting consultation with lawyer {lawyer_id}: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error requesting consultation with lawyer {lawyer_id}: {e}")
            return timer.error("Error al enviar la solicitud", 500)
