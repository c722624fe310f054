# otrs/settings.py

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from otrs.errors import ConfigurationError

DEFAULT_NAMESPACE = "http://www.otrs.org/TicketConnector/"
CONNECTOR_PATH = "/otrs/nph-genericinterface.pl/Webservice/GenericTicketConnector"


@dataclass(frozen=True)
class OtrsConfig:
    """
    Connection constants for one client. Frozen so that concurrent calls
    never see the namespace change under them.
    """
    namespace: str = DEFAULT_NAMESPACE
    scheme: str = "http://"
    connector_path: str = CONNECTOR_PATH
    timeout: float = 30.0


@dataclass(frozen=True)
class OtrsSettings:
    host: str
    user: str
    password: str = field(repr=False)
    config: OtrsConfig = OtrsConfig()


def load_settings(env_path: Optional[Path] = None) -> OtrsSettings:
    """
    Reads OTRS settings from the environment (after loading .env) and
    returns them. Only callers such as ticket_api use this; the SOAP
    client itself is always handed its config explicitly.
    """
    # ─── load .env from the project root unless told otherwise ──────────────
    if env_path is None:
        env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    host     = os.getenv("OTRS_HOST")
    user     = os.getenv("OTRS_USER")
    password = os.getenv("OTRS_PASSWORD")

    missing = [name for name, value in (
        ("OTRS_HOST", host),
        ("OTRS_USER", user),
        ("OTRS_PASSWORD", password),
    ) if not value]
    if missing:
        raise ConfigurationError(f"Missing {'/'.join(missing)} in .env")

    raw_timeout = os.getenv("OTRS_TIMEOUT") or "30"
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigurationError(f"OTRS_TIMEOUT is not a number: {raw_timeout!r}") from exc

    config = OtrsConfig(
        namespace=os.getenv("OTRS_NAMESPACE") or DEFAULT_NAMESPACE,
        timeout=timeout,
    )
    return OtrsSettings(host=host, user=user, password=password, config=config)
