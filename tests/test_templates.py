import pytest

from otrs.envelope import find_leaf
from otrs.errors import TemplateLoadError
from otrs.templates import (
    MappingTemplateSource,
    PackageTemplateSource,
    TemplateKind,
    load_template,
)

from conftest import NS


class TestPackageTemplates:

    def test_session_create_has_qualified_credentials(self):
        doc = load_template(TemplateKind.SESSION_CREATE)
        assert find_leaf(doc, "UserLogin", NS) is not None
        assert find_leaf(doc, "Password", NS) is not None

    def test_ticket_update_leaves_are_unqualified(self):
        doc = load_template(TemplateKind.TICKET_UPDATE)
        for leaf in ("SessionID", "TicketNumber", "Body", "TimeUnit"):
            assert find_leaf(doc, leaf) is not None
            assert find_leaf(doc, leaf, NS) is None

    def test_every_load_is_an_independent_copy(self):
        first = load_template(TemplateKind.SESSION_CREATE)
        second = load_template(TemplateKind.SESSION_CREATE)

        find_leaf(first, "UserLogin", NS).text = "changed"

        assert find_leaf(second, "UserLogin", NS).text is None
        assert find_leaf(load_template(TemplateKind.SESSION_CREATE), "UserLogin", NS).text is None

    def test_custom_namespace_moves_qualified_elements(self):
        ns = "urn:example:Connector"
        doc = load_template(TemplateKind.SESSION_CREATE, namespace=ns)

        for leaf in ("SessionCreate", "UserLogin", "Password"):
            assert find_leaf(doc, leaf, ns) is not None
            assert find_leaf(doc, leaf, NS) is None
        assert find_leaf(doc, "Envelope", "http://www.w3.org/2003/05/soap-envelope") is not None

    def test_custom_namespace_leaves_unqualified_leaves_alone(self):
        ns = "urn:example:Connector"
        doc = load_template(TemplateKind.TICKET_UPDATE, namespace=ns)

        assert find_leaf(doc, "TicketUpdate", ns) is not None
        for leaf in ("SessionID", "TicketNumber", "Body", "TimeUnit"):
            assert find_leaf(doc, leaf) is not None

    def test_default_namespace_is_untouched(self):
        doc = load_template(TemplateKind.SESSION_CREATE, namespace=NS)
        assert find_leaf(doc, "UserLogin", NS) is not None

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(TemplateLoadError) as exc:
            load_template(TemplateKind.TICKET_UPDATE, PackageTemplateSource(tmp_path))
        assert exc.value.kind == "TicketUpdate"


class TestMappingTemplateSource:

    def test_serves_fixture_documents(self):
        source = MappingTemplateSource({TemplateKind.SESSION_CREATE: b"<Envelope><UserLogin/></Envelope>"})
        doc = load_template(TemplateKind.SESSION_CREATE, source)
        assert find_leaf(doc, "UserLogin") is not None

    def test_unregistered_kind_raises(self):
        source = MappingTemplateSource({})
        with pytest.raises(TemplateLoadError):
            load_template(TemplateKind.SESSION_CREATE, source)

    @pytest.mark.parametrize("raw", [b"", b"<Envelope>", b"not xml at all"])
    def test_malformed_xml_raises(self, raw):
        source = MappingTemplateSource({TemplateKind.TICKET_UPDATE: raw})
        with pytest.raises(TemplateLoadError, match="malformed XML"):
            load_template(TemplateKind.TICKET_UPDATE, source)
