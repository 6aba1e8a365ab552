"""Sentinels, selectors and text patterns shared by the field extractors."""

from __future__ import annotations

import re

# Sentinels
NO_TITLE = "No Title"
UNKNOWN = "Unknown"
TITLE_DELIMITER = " - "
FULL_DESCRIPTION_NUMBER = "00001"
FULL_DESCRIPTION_ID = "DESC-FULL"

# Section headings
DESCRIPTION_HEADING = "Description"
CLAIMS_HEADING = "Claims"
DESCRIPTION_HEADING_TAGS = ("h2", "h3", "h4", "b", "strong")
SECTION_BREAK_TAGS = frozenset({"h2", "h3", "h4"})
RELATED_HEADING_SELECTOR = "h2, h3, h4, div.heading, b, strong, heading"
RELATED_HEADING_MARKERS = ("RELATED APPLICATIONS", "CROSS-REFERENCE")

ASSIGNEE_LABELS = frozenset({"Current Assignee", "Original Assignee", "Assignee"})

# Timeline widget
TIMELINE_RESULT_PREFIX = "patent/"
TOOLTIP_APPLICATION_LABEL = "Application number:"
TOOLTIP_FILING_DATE_LABEL = "Filing date:"

# "US09152718-20151006-D00000.png" -> "D00000"
FIGURE_NUMBER_RE = re.compile(r"([A-Z]\d+)\.(?i:png|jpe?g|gif|tiff?)$")

RELATED_APPLICATION_RE = re.compile(r"(?:division|continuation|continuation-in-part) of", re.IGNORECASE)

COUNTRY_CODE_RE = re.compile(r"^[A-Z]{2}")

PATENT_HREF_RE = re.compile(r"/patent/([A-Z0-9]+)")

# Two-letter office, 7+ digit serial, kind letter, optional kind digit: "US1234567B2"
PATENT_NUMBER_RE = re.compile(r"\b([A-Z]{2}\d{7,}[A-Z]\d?)\b")

PRIORITY_DATE_RE = re.compile(r"Priority\s+(\d{4}-\d{2}-\d{2})")
FILED_DATE_RE = re.compile(r"Filed\s+(\d{4}-\d{2}-\d{2})")
