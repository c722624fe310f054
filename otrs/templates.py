# otrs/templates.py

import logging
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Protocol

from lxml import etree

from otrs.errors import TemplateLoadError
from otrs.settings import DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)

ENVELOPE_DIR = Path(__file__).parent / "envelopes"


class TemplateKind(str, Enum):
    SESSION_CREATE = "SessionCreate"
    TICKET_UPDATE = "TicketUpdate"


class TemplateSource(Protocol):
    """Anything that can hand out the raw bytes of an envelope skeleton."""

    def read(self, kind: TemplateKind) -> bytes:
        ...


class PackageTemplateSource:
    """Reads the skeletons shipped in otrs/envelopes/<Kind>.xml."""

    def __init__(self, directory: Path = ENVELOPE_DIR):
        self.directory = directory

    def read(self, kind: TemplateKind) -> bytes:
        path = self.directory / f"{kind.value}.xml"
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TemplateLoadError(kind.value, f"cannot read {path}") from exc


class MappingTemplateSource:
    """Serves skeletons from memory, e.g. fixture documents in tests."""

    def __init__(self, documents: Mapping[TemplateKind, bytes]):
        self.documents = dict(documents)

    def read(self, kind: TemplateKind) -> bytes:
        try:
            return self.documents[kind]
        except KeyError as exc:
            raise TemplateLoadError(kind.value, "no document registered") from exc


def retarget_namespace(root, old: str, new: str) -> None:
    """Moves every element in namespace `old` into `new`. Unqualified leaves stay as they are."""
    prefix = f"{{{old}}}"
    for element in root.iter():
        # comments and processing instructions have a non-str tag
        if isinstance(element.tag, str) and element.tag.startswith(prefix):
            element.tag = f"{{{new}}}{etree.QName(element).localname}"
    etree.cleanup_namespaces(root)


def load_template(kind: TemplateKind,
                  source: Optional[TemplateSource] = None,
                  namespace: Optional[str] = None) -> etree._ElementTree:
    """
    Returns a freshly parsed copy of the envelope skeleton for `kind`.
    Every call parses again, so callers may mutate the result freely.

    The bundled skeletons are written against the stock OTRS connector
    namespace; pass `namespace` to move them onto a different one.
    """
    source = source or PackageTemplateSource()
    raw = source.read(kind)
    try:
        root = etree.fromstring(raw, parser=etree.XMLParser(no_network=True))
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise TemplateLoadError(kind.value, f"malformed XML ({exc})") from exc
    if namespace and namespace != DEFAULT_NAMESPACE:
        retarget_namespace(root, DEFAULT_NAMESPACE, namespace)
    logger.debug("Loaded %s envelope template", kind.value)
    return etree.ElementTree(root)
