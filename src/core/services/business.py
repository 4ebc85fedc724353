"""Borrado lógico de negocios protegido por token de confirmación."""

from __future__ import annotations

import logging

from core.domain.models import Business, BusinessStatus, Rejection
from core.services.confirmation import CONFIRMATION_PREFIX, expected_token
from core.services.tag_fields import Outcome

logger = logging.getLogger(__name__)


def soft_delete(
    business: Business,
    confirmation: str,
    *,
    prefix: str = CONFIRMATION_PREFIX,
) -> Outcome[Business]:
    """Marca el negocio como DELETED si `confirmation` coincide exactamente.

    El token se comprueba siempre, también para un negocio ya eliminado; solo
    con el token correcto ese negocio se devuelve tal cual (idempotente).
    """

    expected = expected_token(business.name, prefix=prefix)
    if not expected:
        return Outcome(business, Rejection.NO_VALID_TOKEN)
    if confirmation != expected:
        logger.debug("Confirmation mismatch for business %s", business.id)
        return Outcome(business, Rejection.TOKEN_MISMATCH)

    if business.status is BusinessStatus.DELETED:
        return Outcome(business)

    logger.info("Soft-deleting business %s", business.id)
    return Outcome(business.model_copy(update={"status": BusinessStatus.DELETED}))
