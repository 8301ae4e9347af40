"""Authorization gate for configuration instructions"""
import logging
from ..errors import UnauthorizedError
from ..state.vault import VaultView

logger = logging.getLogger(__name__)

def require_authorized(vault: VaultView, caller: str) -> None:
    """Abort unless the vault recognises caller as privileged"""
    if not vault.is_authorized(caller):
        logger.warning("Rejected configuration call from %s", caller)
        raise UnauthorizedError(f"{caller} is not authorized")
