"""
Unit tests for the RegisterExtractor orchestrator.

Tests use built register pages so each property is exercised through
the full parse → locate → extract → deduplicate pass.
"""

from unittest.mock import patch

import pytest

from fmcsa_register.api.extraction import RegisterExtractor, extract_register
from fmcsa_register.errors import DocumentParseError, RegisterError, UnexpectedDocumentError
from fmcsa_register.models import RawDocument


@pytest.fixture
def extractor(small_catalog):
    """Extractor over NC, CX2, REV with the default marker."""
    return RegisterExtractor(catalog=small_catalog, marker='FMCSA REGISTER')


class TestSignatureCheck:
    """The register marker gates every extraction."""

    def test_missing_marker_raises(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [('MC-1', ['A'])]), marker=None)

        with pytest.raises(UnexpectedDocumentError) as exc_info:
            extractor.extract(html, request_date='05-JAN-24')

        assert exc_info.value.marker == 'FMCSA REGISTER'

    def test_missing_marker_processes_no_category(self, extractor, register_page):
        html = register_page(marker=None)

        with patch('fmcsa_register.api.extraction.LxmlDocumentTree') as mock_tree:
            with pytest.raises(UnexpectedDocumentError):
                extractor.extract(html)

        mock_tree.assert_not_called()

    def test_marker_is_case_insensitive(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [('MC-1', ['A'])]), marker='Fmcsa Register')

        assert extractor.extract(html).count == 1

    def test_raw_document_marker_is_used(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [('MC-1', ['A'])]), marker='LIVIEW NOTICES')
        document = RawDocument(html=html, request_date='05-JAN-24', marker='liview notices')

        assert extractor.extract(document).count == 1


class TestExtract:
    """Test suite for RegisterExtractor.extract()."""

    def test_single_record_example(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('REV', [('MC-98765', ['ACME TRUCKING LLC', '03/10/2024'])]))

        result = extractor.extract(html, request_date='10-MAR-24')

        assert result.to_response() == {
            'success': True,
            'count': 1,
            'date': '10-MAR-24',
            'entries': [{
                'number': 'MC-98765',
                'title': 'ACME TRUCKING LLC',
                'decided': '03/10/2024',
                'category': 'REVOCATION',
            }],
        }

    def test_date_recovered_past_empty_cell(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [('MC-12345', ['Some Carrier Co', '', '01/15/2024'])]))

        entry = extractor.extract(html).entries[0]

        assert entry.decided == '01/15/2024'

    def test_missing_category_does_not_affect_others(self, extractor, register_page, sibling_section):
        html = register_page(
            sibling_section('NC', [('MC-1', ['ONE'])]),
            sibling_section('REV', [('MC-2', ['TWO'])])
        )

        result, outcomes = extractor.extract_with_outcomes(html)

        assert [e.category for e in result.entries] == ['NAME CHANGE', 'REVOCATION']
        cx2 = outcomes[1]
        assert (cx2.code, cx2.found, cx2.reason, cx2.records) == ('CX2', False, 'anchor', 0)

    def test_catalog_order_not_document_order(self, extractor, register_page, sibling_section):
        html = register_page(
            sibling_section('REV', [('MC-2', ['TWO'])]),
            sibling_section('NC', [('MC-1', ['ONE'])])
        )

        result = extractor.extract(html)

        assert [e.number for e in result.entries] == ['MC-1', 'MC-2']

    def test_duplicates_keep_first_in_catalog(self, extractor, register_page, sibling_section):
        html = register_page(
            sibling_section('REV', [('MC-7', ['ACME', '02/02/2024'])]),
            sibling_section('NC', [('MC-7', ['ACME'])])
        )

        result = extractor.extract(html)

        assert result.count == 1
        assert result.entries[0].category == 'NAME CHANGE'
        assert result.entries[0].decided == 'N/A'

    def test_one_entry_per_valid_header(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [
            ('MC-1', ['ONE']),
            ('&nbsp;', ['NO NUMBER']),
            ('MC-3', []),
            ('MC-4', ['FOUR', '04/04/2024']),
        ]))

        result, outcomes = extractor.extract_with_outcomes(html)

        assert [e.number for e in result.entries] == ['MC-1', 'MC-4']
        assert (outcomes[0].records, outcomes[0].dropped) == (2, 2)

    def test_heading_table_variant(self, extractor, register_page, heading_section, sibling_section):
        html = register_page(
            sibling_section('NC', [('MC-1', ['ONE'])]),
            heading_section('REV', 'REVOCATION', [('MC-2', ['TWO', '', '01/15/2024'])])
        )

        result = extractor.extract(html)

        assert [(e.number, e.category, e.decided) for e in result.entries] == [
            ('MC-1', 'NAME CHANGE', 'N/A'),
            ('MC-2', 'REVOCATION', '01/15/2024'),
        ]

    def test_unclosed_rows(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [
            ('MC-1', ['ONE', '01/01/2024']),
            ('MC-2', ['TWO']),
        ], close_rows=False))

        result = extractor.extract(html)

        assert [(e.number, e.decided) for e in result.entries] == [
            ('MC-1', '01/01/2024'),
            ('MC-2', 'N/A'),
        ]

    def test_only_first_table_after_anchor(self, extractor, register_page, sibling_section):
        html = register_page(
            sibling_section('NC', [('MC-1', ['ONE'])]),
            '<table><tr><th scope="row">MC-99</th><td>STRAY</td></tr></table>'
        )

        result = extractor.extract(html)

        assert [e.number for e in result.entries] == ['MC-1']

    def test_entities_decoded(self, extractor, register_page, sibling_section):
        html = register_page(sibling_section('NC', [('MC-1', ['SMITH &amp; SONS&nbsp;LLC'])]))

        assert extractor.extract(html).entries[0].title == 'SMITH & SONS LLC'

    def test_no_sections_yields_empty_result(self, extractor, register_page):
        result = extractor.extract(register_page(), request_date='06-JAN-24')

        assert result.to_response() == {'success': True, 'count': 0, 'date': '06-JAN-24', 'entries': []}

    def test_request_date_echoed_verbatim(self, extractor, register_page):
        assert extractor.extract(register_page(), request_date='not-a-date').source_date == 'not-a-date'

    def test_document_request_date_used_by_default(self, extractor, register_page):
        document = RawDocument(html=register_page(), request_date='05-JAN-24')

        assert extractor.extract(document).source_date == '05-JAN-24'

    def test_idempotent(self, extractor, register_page, sibling_section, heading_section):
        document = RawDocument(html=register_page(
            sibling_section('NC', [('MC-1', ['ONE']), ('MC-2', ['TWO', '02/02/2024'])]),
            heading_section('REV', 'REVOCATION', [('MC-1', ['ONE']), ('MC-3', ['THREE'])])
        ), request_date='05-JAN-24')

        first = extractor.extract(document)
        second = extractor.extract(document)

        assert first == second
        assert [e.number for e in first.entries] == ['MC-1', 'MC-2', 'MC-3']


class TestExtractRegister:
    """extract_register() uses the configured catalog."""

    def test_default_catalog(self, register_page, sibling_section):
        html = register_page(
            sibling_section('GDN', [('MC-8', ['GRANTED'])]),
            sibling_section('CPL', [('MC-2', ['PERMIT'])])
        )

        result = extract_register(html, request_date='05-JAN-24')

        assert [e.category for e in result.entries] == [
            'CERTIFICATE, PERMIT, LICENSE',
            'GRANT DECISION NOTICES',
        ]


class TestMalformedUpstreamContent:
    """Pages lxml cannot take as-is never escape as non-register errors."""

    def test_xml_prolog_page_is_extracted(self, extractor, register_page, sibling_section):
        html = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            + register_page(sibling_section('NC', [('MC-1', ['ONE', '01/05/2024'])]))
        )

        result = extractor.extract(html, request_date='05-JAN-24')

        assert [(e.number, e.decided) for e in result.entries] == [('MC-1', '01/05/2024')]

    def test_xml_prolog_page_via_extract_register(self, register_page, sibling_section):
        html = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            + register_page(sibling_section('REV', [('MC-9', ['NINE'])]))
        )

        result = extract_register(html, request_date='05-JAN-24')

        assert result.to_response()['entries'][0]['category'] == 'REVOCATION'

    def test_marker_only_in_comment_raises_parse_error(self, extractor):
        with pytest.raises(DocumentParseError):
            extractor.extract('<!-- FMCSA REGISTER -->', request_date='05-JAN-24')

    def test_unparseable_page_via_extract_register(self):
        with pytest.raises(RegisterError):
            extract_register('<!-- fmcsa register -->', request_date='05-JAN-24')

    def test_marker_text_without_elements_yields_no_entries(self, extractor):
        result = extractor.extract('FMCSA REGISTER', request_date='05-JAN-24')

        assert result.count == 0
        assert result.source_date == '05-JAN-24'
