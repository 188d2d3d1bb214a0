"""Regex battery for PII detection.

Detectors are independent: a substring may match several of them (a DOB
phrase also contains a ``date``). Every match is reported.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PiiDetector:
    type: str
    label: str
    pattern: re.Pattern[str]


_FLAGS = re.ASCII

DETECTORS: tuple[PiiDetector, ...] = (
    PiiDetector(
        "ssn",
        "Social Security Number",
        re.compile(r"\b\d{3}-\d{2}-\d{4}\b", _FLAGS),
    ),
    PiiDetector(
        "ssn_no_dash",
        "SSN (no dashes)",
        re.compile(r"\b\d{9}\b", _FLAGS),
    ),
    PiiDetector(
        "phone",
        "Phone Number",
        re.compile(r"\b(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b", _FLAGS),
    ),
    PiiDetector(
        "email",
        "Email Address",
        re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", _FLAGS),
    ),
    PiiDetector(
        "dob",
        "Date of Birth",
        re.compile(
            r"\b(?:DOB|Date of Birth|Born|Birthday)[:\s]*\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b",
            _FLAGS | re.IGNORECASE,
        ),
    ),
    PiiDetector(
        "date",
        "Date Pattern",
        re.compile(r"\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b", _FLAGS),
    ),
    PiiDetector(
        "credit_card",
        "Credit Card Number",
        re.compile(r"\b(?:\d{4}[-\s]?){3}\d{4}\b", _FLAGS),
    ),
    PiiDetector(
        "credit_card_amex",
        "Credit Card (Amex)",
        re.compile(r"\b3[47]\d{2}[-\s]?\d{6}[-\s]?\d{5}\b", _FLAGS),
    ),
)
