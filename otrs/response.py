# otrs/response.py

import re
from typing import Callable, TypeVar, Union

from lxml import etree

from otrs.envelope import find_leaf
from otrs.errors import RemoteOperationError, RemoteProtocolError

T = TypeVar("T")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


def to_int64(text: str) -> int:
    """Strict integer parse for ids like ArticleID. No defaults, no floats."""
    text = text.strip()
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{value} does not fit in 64 bits")
    return value


def to_text(text: str) -> str:
    if not text.strip():
        raise ValueError("empty")
    return text


def parse_response(body: Union[str, bytes]):
    """
    Parses a connector reply. Entities are not expanded and nothing is
    fetched from the network while parsing.

    Bytes are decoded the way their XML declaration says. Text is already
    decoded, so any encoding= in its declaration is ignored.
    """
    encoding = None
    if isinstance(body, str):
        body = body.encode("utf-8")
        encoding = "utf-8"
    parser = etree.XMLParser(resolve_entities=False, no_network=True, encoding=encoding)
    try:
        return etree.fromstring(body, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise RemoteProtocolError(f"Response is not well-formed XML: {exc}") from exc


def contains_error(document, namespace: str) -> bool:
    return find_leaf(document, "Error", namespace) is not None


def interpret(body: Union[str, bytes], result_leaf: str, namespace: str,
              convert: Callable[[str], T] = str) -> T:
    """
    Turns a connector reply into the value of `result_leaf`.

    An <Error> element anywhere in the reply wins over everything else and
    becomes a RemoteOperationError carrying ErrorCode and ErrorMessage.
    """
    document = parse_response(body)

    if contains_error(document, namespace):
        code = find_leaf(document, "ErrorCode", namespace)
        message = find_leaf(document, "ErrorMessage", namespace)
        if code is None or message is None:
            raise RemoteProtocolError("Error element without ErrorCode/ErrorMessage")
        raise RemoteOperationError(code.text or "", message.text or "")

    element = find_leaf(document, result_leaf, namespace)
    if element is None:
        raise RemoteProtocolError(f"Response has no {result_leaf} element")
    text = element.text or ""
    try:
        return convert(text)
    except (TypeError, ValueError) as exc:
        raise RemoteProtocolError(f"Unexpected {result_leaf} value {text!r}") from exc
