"""Heuristic parsing of free-text forensic analysis into a ForgeryReport.

The model is asked for a structured-but-textual answer, so everything here is
best-effort text matching:

- the authenticity score is the first integer after "authenticity score";
- risk factors come from five fixed phrase groups, checked in order;
- section bodies are the text after a heading up to the next numbered item
  or bold heading.

Sub-report fields (font mixing, spacing irregularities, ...) are derived from
the detected risk factors, not measured independently. Numeric values in those
sub-reports are nominal placeholders and should not be read as forensic
measurements.
"""

import logging
import re

from .models import (
    AUTHENTICITY_DEFAULT,
    FontAnalysis,
    ForgeryReport,
    ImageQualityAnalysis,
    SpacingAnalysis,
    StructuralAnalysis,
)

logger = logging.getLogger(__name__)

FONT_INCONSISTENCY = "Font inconsistencies detected"
IRREGULAR_SPACING = "Irregular spacing patterns"
DIGITAL_MANIPULATION = "Possible digital manipulation"
IMAGE_QUALITY = "Image quality inconsistencies"
STRUCTURAL_ANOMALY = "Structural anomalies"

# (phrases, label) in check order
RISK_PHRASES: list[tuple[tuple[str, ...], str]] = [
    (("font inconsistency", "font mixing"), FONT_INCONSISTENCY),
    (("spacing irregular", "spacing anomal"), IRREGULAR_SPACING),
    (("digital manipulation", "tampering"), DIGITAL_MANIPULATION),
    (("compression artifact", "quality inconsisten"), IMAGE_QUALITY),
    (("alignment issue", "layout anomal"), STRUCTURAL_ANOMALY),
]

_SCORE_PATTERN = re.compile(r"authenticity score[:\s*]*(\d+)", re.IGNORECASE)


def extract_authenticity_score(text: str) -> float | None:
    """Return the score following "authenticity score", clamped to [0, 100]."""
    match = _SCORE_PATTERN.search(text)
    if not match:
        return None
    return float(min(100, max(0, int(match.group(1)))))


def detect_risk_factors(text: str) -> list[str]:
    """Return canonical risk-factor labels present in text, in fixed order."""
    lowered = text.lower()
    factors: list[str] = []
    for phrases, label in RISK_PHRASES:
        if any(p in lowered for p in phrases) and label not in factors:
            factors.append(label)
    return factors


def extract_section(text: str, name: str) -> str | None:
    """Extract the body of a named section.

    Matches the heading case-insensitively (an optional trailing "analysis"
    word is absorbed), then captures the rest of that line and every
    following line until one starts with a numbered item ("2.") or a bold
    heading ("**"). Returns None when the heading is missing or the body is
    empty.
    """
    pattern = re.compile(
        re.escape(name)
        + r"(?:\s+analysis)?[ \t:*]*([^\n]*(?:\n(?!\s*\d+\.|\s*\*\*)[^\n]*)*)",
        re.IGNORECASE,
    )
    match = pattern.search(text)
    if not match:
        return None
    body = match.group(1).strip().strip("*").strip()
    return body or None


def _build_report(text: str, resolution: str) -> ForgeryReport:
    score = extract_authenticity_score(text)
    factors = detect_risk_factors(text)

    font_issue = FONT_INCONSISTENCY in factors
    spacing_issue = IRREGULAR_SPACING in factors
    manipulation = DIGITAL_MANIPULATION in factors
    quality_issue = IMAGE_QUALITY in factors
    structural_issue = STRUCTURAL_ANOMALY in factors

    return ForgeryReport(
        font_analysis=FontAnalysis(
            font_consistency=0.7 if font_issue else 0.95,
            suspicious_characters=["Various characters"] if font_issue else [],
            font_mixing_detected=font_issue,
            digital_font_indicators=["Digital font signatures"] if font_issue else [],
            analysis=extract_section(text, "font analysis")
            or "Font analysis completed",
        ),
        spacing_analysis=SpacingAnalysis(
            letter_spacing=1.0,
            word_spacing=2.5,
            line_spacing=1.2,
            irregularities=["Inconsistent letter spacing"] if spacing_issue else [],
            suspicious_patterns=["Unnatural spacing"] if spacing_issue else [],
            analysis=extract_section(text, "spacing analysis")
            or "Spacing analysis completed",
        ),
        image_quality_analysis=ImageQualityAnalysis(
            resolution=resolution,
            compression_artifacts=quality_issue,
            digital_manipulation_signs=["Pixel inconsistencies"] if manipulation else [],
            pixelation_issues=quality_issue,
            analysis=extract_section(text, "image quality")
            or "Image quality analysis completed",
        ),
        structural_analysis=StructuralAnalysis(
            alignment_issues=["Text misalignment"] if structural_issue else [],
            margin_inconsistencies=structural_issue,
            layout_anomalies=["Layout irregularities"] if structural_issue else [],
            watermark_analysis="No watermark detected",
            analysis=extract_section(text, "structural analysis")
            or "Structural analysis completed",
        ),
        overall_assessment=text,
        risk_factors=factors,
        authenticity_score=AUTHENTICITY_DEFAULT if score is None else score,
    )


def parse_forgery_analysis(text: str, resolution: str = "300 DPI") -> ForgeryReport:
    """Convert raw model output into a ForgeryReport. Never raises."""
    try:
        return _build_report(text or "", resolution)
    except Exception as e:
        logger.warning(f"Failed to parse forgery analysis: {e}")
        return _build_report("", resolution)
