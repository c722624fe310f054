"""
Shared fixtures: a recording httpx.MockTransport and canned connector replies.
"""

import httpx
import pytest

from otrs.otrs_api import OtrsSoapClient
from otrs.settings import DEFAULT_NAMESPACE, OtrsConfig

NS = DEFAULT_NAMESPACE
HOST = "helpdesk.example.com"
ENDPOINT = f"http://{HOST}/otrs/nph-genericinterface.pl/Webservice/GenericTicketConnector"


def soap_reply(inner: str, namespace: str = NS) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<soap:Envelope xmlns:soap="http://www.w3.org/2003/05/soap-envelope">'
        "<soap:Body>"
        f'<Response xmlns="{namespace}">{inner}</Response>'
        "</soap:Body>"
        "</soap:Envelope>"
    )


def session_reply(session_id: str = "abc123") -> str:
    return soap_reply(f"<SessionID>{session_id}</SessionID>")


def article_reply(article_id: str = "42") -> str:
    return soap_reply(f"<TicketID>7</TicketID><ArticleID>{article_id}</ArticleID>")


def error_reply(code: str, message: str) -> str:
    return soap_reply(
        f"<Error><ErrorCode>{code}</ErrorCode><ErrorMessage>{message}</ErrorMessage></Error>"
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it saw."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def reply_with():
    """Build a transport that answers every request with the same body/status."""
    def factory(body: str, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, text=body))
    return factory


@pytest.fixture
def make_client():
    def factory(transport, config: OtrsConfig = OtrsConfig(), template_source=None):
        return OtrsSoapClient(config, template_source=template_source, transport=transport)
    return factory
