from __future__ import annotations

import json

from patextract.config import ExtractionSettings
from patextract.dom.tree import load_document
from patextract.extraction.assembler import assemble_patent_record, assemble_search_results_page
from patextract.extraction.patterns import NO_TITLE, UNKNOWN

_PATENT_PAGE = """
<html>
<head>
  <title>US9152718B2 - System and method for interactive big data analysis - Google Patents</title>
  <meta name="description" content="A system and method for interactive big data analysis.">
  <meta name="DC.date" content="2013-08-06" scheme="dateSubmitted">
  <meta name="DC.contributor" content="Google LLC" scheme="assignee">
</head>
<body>
  <section itemprop="description">
    <div class="description-paragraph" num="0001" id="p-0001">This application is a continuation of U.S. application Ser. No. 12/345,678.</div>
    <div class="description-paragraph" num="0002" id="p-0002">The invention relates to data analysis.</div>
  </section>
  <section itemprop="claims">
    <div class="claim" num="00001" id="CLM-00001"><div class="claim-text">1. A method comprising analysing data.</div></div>
  </section>
  <img src="https://patentimages.storage.googleapis.com/a1/US09152718-20151006-D00001.png">
  <table>
    <tr itemprop="applications">
      <td><span itemprop="applicationNumber">US13/960,021</span></td>
      <td><span itemprop="filingDate">2013-08-06</span></td>
    </tr>
  </table>
</body>
</html>
"""

_OPTIONAL_PATENT_FIELDS = (
    "abstract",
    "description_paragraphs",
    "claims",
    "images",
    "filing_date",
    "assignee",
    "related_application",
    "claiming_priority",
    "family_applications",
)


def test_assemble_patent_record_from_structured_page() -> None:
    record = assemble_patent_record(load_document(_PATENT_PAGE))

    assert record.title == "System and method for interactive big data analysis"
    assert record.abstract == "A system and method for interactive big data analysis."
    assert record.filing_date == "2013-08-06"
    assert record.assignee == "Google LLC"
    assert record.description_paragraphs is not None and len(record.description_paragraphs) == 2
    assert record.claims is not None and record.claims[0].id == "CLM-00001"
    assert record.images is not None and record.images[0].figure_number == "D00001"
    assert record.related_application == record.description_paragraphs[0].text
    assert record.claiming_priority is None
    assert record.family_applications is not None
    assert record.family_applications[0].country_code == "US"


def test_empty_page_yields_placeholder_title_and_null_fields() -> None:
    record = assemble_patent_record(load_document("<html><head></head><body></body></html>"))
    payload = record.to_dict()

    assert payload["title"] == NO_TITLE
    for field in _OPTIONAL_PATENT_FIELDS:
        assert payload[field] is None, field


def test_optional_fields_are_null_or_non_empty() -> None:
    page = """
    <html><head>
      <title>Untitled</title>
      <meta name="description" content="">
      <meta name="DC.contributor" content="" scheme="assignee">
    </head><body>
      <dl><dt>Assignee</dt><dd> </dd></dl>
      <h3>Related Applications</h3><p></p>
      <table><tr itemprop="applications"><td><span itemprop="applicationNumber"> </span></td></tr></table>
    </body></html>
    """
    payload = assemble_patent_record(load_document(page)).to_dict()

    for field in _OPTIONAL_PATENT_FIELDS:
        value = payload[field]
        assert value is None or (value != "" and value != []), field


def test_record_serializes_with_contract_field_names() -> None:
    payload = json.loads(json.dumps(assemble_patent_record(load_document(_PATENT_PAGE)).to_dict()))

    assert list(payload) == ["title", *_OPTIONAL_PATENT_FIELDS]
    assert set(payload["description_paragraphs"][0]) == {"number", "id", "text"}
    assert set(payload["images"][0]) == {"url", "figure_number"}
    assert set(payload["family_applications"][0]) == {
        "application_number",
        "country_code",
        "priority_date",
        "filing_date",
        "title",
    }


def test_image_marker_comes_from_settings() -> None:
    settings = ExtractionSettings(image_host_marker="example-cdn")
    page = '<html><body><img src="https://example-cdn.net/fig-D00002.png"></body></html>'

    record = assemble_patent_record(load_document(page), settings)

    assert record.images is not None
    assert record.images[0].figure_number == "D00002"


def test_assemble_search_results_page_without_listing() -> None:
    results = assemble_search_results_page(load_document("<html><body></body></html>"))

    assert results.total_results == UNKNOWN
    assert results.top_assignees is None
    assert results.top_cpcs is None
    assert results.patents == []


def test_deeply_nested_page_still_assembles_a_record() -> None:
    depth = 2000
    markup = (
        "<html><head><title>US1234567B2 - Deep widget - Google Patents</title></head><body>"
        + "<div>" * depth
        + '<div class="claim" num="00001" id="CLM-00001">1. A deep widget.</div>'
        + "</div>" * depth
        + "</body></html>"
    )

    record = assemble_patent_record(load_document(markup))

    assert record.title == "Deep widget"
    assert record.claims is not None
    assert record.claims[0].text == "1. A deep widget."
