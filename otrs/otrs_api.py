# otrs/otrs_api.py

import logging
from typing import Optional, Union

import httpx

from otrs.envelope import fill, format_time_unit, serialize
from otrs.errors import InvalidArgument
from otrs.response import interpret, to_int64, to_text
from otrs.settings import OtrsConfig
from otrs.templates import TemplateKind, TemplateSource, load_template
from otrs.transport import build_endpoint, send

logger = logging.getLogger(__name__)


def _require(**fields):
    for name, value in fields.items():
        if value is None or value == "":
            raise InvalidArgument(name)


class OtrsSoapClient:
    """
    Talks SOAP 1.2 to the OTRS GenericTicketConnector.

    The client keeps no state between calls: every operation loads its own
    envelope, opens its own HTTP connection and hands the result back.
    """

    def __init__(self,
                 config: OtrsConfig = OtrsConfig(),
                 template_source: Optional[TemplateSource] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.template_source = template_source
        self.transport = transport

    def _prepare(self, kind: TemplateKind, values: dict, namespace: Optional[str]) -> bytes:
        document = load_template(kind, self.template_source, self.config.namespace)
        report = fill(document, values, namespace)
        for leaf in report.missing:
            logger.warning("%s template has no %s leaf, sending it without", kind.value, leaf)
        return serialize(document)

    async def create_session(self, user_id: str, password: str, host_name: str) -> str:
        """
        Logs the agent in and returns the SessionID for later calls
        such as update_ticket. The id is not kept anywhere.
        """
        _require(user_id=user_id, password=password, host_name=host_name)

        kind = TemplateKind.SESSION_CREATE
        envelope = self._prepare(kind, {
            "UserLogin": user_id,
            "Password":  password,
        }, self.config.namespace)

        body = await send(build_endpoint(host_name, self.config), kind.value,
                          envelope, self.config, self.transport)
        session_id = interpret(body, "SessionID", self.config.namespace, to_text)
        logger.info("Created OTRS session for %s on %s", user_id, host_name)
        return session_id

    async def update_ticket(self, session_id: str, ticket_number: str, message: str,
                            time_unit: Union[int, float], host_name: str) -> int:
        """
        Appends a note to a ticket and books `time_unit` on it.

        `session_id` must come from create_session(); the server is the one
        that decides whether it is still valid.
        Returns the ArticleID of the new note.
        """
        _require(session_id=session_id, ticket_number=ticket_number,
                 message=message, time_unit=time_unit, host_name=host_name)

        kind = TemplateKind.TICKET_UPDATE
        # Outbound TicketUpdate leaves are unqualified; the reply is not.
        envelope = self._prepare(kind, {
            "SessionID":    session_id,
            "TicketNumber": ticket_number,
            "Body":         message,
            "TimeUnit":     format_time_unit(time_unit),
        }, None)

        body = await send(build_endpoint(host_name, self.config), kind.value,
                          envelope, self.config, self.transport)
        article_id = interpret(body, "ArticleID", self.config.namespace, to_int64)
        logger.info("Added article %s to ticket %s", article_id, ticket_number)
        return article_id
