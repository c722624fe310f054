# ticket_api.py

import asyncio
import logging
from typing import Optional, Union

from otrs.otrs_api import OtrsSoapClient
from otrs.settings import OtrsSettings, load_settings


async def open_session(settings: Optional[OtrsSettings] = None,
                       client: Optional[OtrsSoapClient] = None) -> str:
    """
    Log the configured agent in and return a fresh SessionID.
    """
    settings = settings or load_settings()
    client = client or OtrsSoapClient(settings.config)
    return await client.create_session(settings.user, settings.password, settings.host)


async def add_internal_note(ticket_number: str, note: str,
                            time_unit: Union[int, float] = 0,
                            settings: Optional[OtrsSettings] = None,
                            client: Optional[OtrsSoapClient] = None) -> int:
    """
    Add an internal note to the ticket, booking `time_unit` on it.
    Returns the ArticleID OTRS created for the note.
    """
    settings = settings or load_settings()
    client = client or OtrsSoapClient(settings.config)
    session_id = await client.create_session(settings.user, settings.password, settings.host)
    return await client.update_ticket(session_id, ticket_number, note, time_unit, settings.host)


# Optional smoke-test
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    try:
        asyncio.run(open_session())
        print("✅ OTRS session created!")
    except Exception as e:
        print("❌ OTRS session failed:", e)
