"""
Supplier credentials from the process environment.

main.py loads a .env file first, so values there count as environment too.
Only suppliers listed in SUPPLIER_ENV_VARS can be configured this way.
"""

import os
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# credential key -> environment variable, per supplier identifier
SUPPLIER_ENV_VARS: Dict[str, Dict[str, str]] = {
    "digikey": {"client_id": "DIGIKEY_CLIENT_ID", "client_secret": "DIGIKEY_CLIENT_SECRET"},
    "mouser": {"api_key": "MOUSER_API_KEY"},
    "jlcpcb": {},
}

DIGIKEY_SANDBOX_VAR = "DIGIKEY_CLIENT_SANDBOX"


def _read(variable: str) -> str:
    return os.getenv(variable, "").strip()


def env_flag(variable: str, default: bool = False) -> bool:
    """Interpret true/1/yes/on (any case) as True"""
    raw = _read(variable)
    if not raw:
        return default
    return raw.lower() in ("true", "1", "yes", "on")


def get_supplier_credentials_from_env(supplier_name: str) -> Optional[Dict[str, str]]:
    """Credentials set for a supplier, or None when none are set.

    Blank values count as unset.
    """
    variables = SUPPLIER_ENV_VARS.get(supplier_name.lower(), {})
    credentials = {key: _read(var) for key, var in variables.items() if _read(var)}

    if not credentials:
        logger.debug(f"No credentials in environment for {supplier_name}")
        return None

    logger.info(f"Loaded {', '.join(sorted(credentials))} for {supplier_name} from environment")
    return credentials


def get_supplier_config_from_env(supplier_name: str) -> Dict[str, Any]:
    """Non-secret supplier options; currently only the DigiKey sandbox toggle"""
    if supplier_name.lower() == "digikey":
        return {"sandbox": env_flag(DIGIKEY_SANDBOX_VAR)}
    return {}


def list_available_env_credentials() -> Dict[str, List[str]]:
    """Names (never values) of the credentials present, per supplier"""
    available = {}
    for supplier_name, variables in SUPPLIER_ENV_VARS.items():
        present = [key for key, var in variables.items() if _read(var)]
        if present:
            available[supplier_name] = present
    return available
