"""Shared prompts for page analysis and document summaries."""

CONTENT_PROMPT = """\
Analyze this document page image in detail. Provide:
1. A summary of the main content and topics
2. Key information, data, or insights found
3. Document structure and formatting observations
4. Any notable elements like tables, charts, or images
5. Overall assessment of the content quality and readability

Be thorough and specific in your analysis."""

FORGERY_PROMPT = """\
Analyze this document image for potential forgery and authenticity issues. \
Provide a detailed forensic analysis including:

1. **Font Analysis:**
   - Font consistency throughout the document
   - Suspicious character variations or irregularities
   - Evidence of font mixing or digital font insertion
   - Digital font indicators vs. natural printing

2. **Spacing Analysis:**
   - Letter spacing consistency and irregularities
   - Word spacing patterns and anomalies
   - Line spacing uniformity
   - Suspicious spacing patterns that indicate digital manipulation

3. **Image Quality Analysis:**
   - Resolution consistency across the document
   - Compression artifacts or digital manipulation signs
   - Pixelation issues or quality inconsistencies
   - Evidence of copy-paste operations

4. **Structural Analysis:**
   - Text alignment issues or irregularities
   - Margin inconsistencies
   - Layout anomalies that suggest tampering
   - Watermark or security feature analysis

5. **Overall Assessment:**
   - Risk factors identified
   - Authenticity score (0-100, where 100 is most authentic)
   - Overall risk assessment
   - Specific recommendations

Format your response as a structured analysis with clear sections. Be specific \
about any anomalies detected and provide confidence levels for your findings."""

SUMMARY_PROMPT = """\
Based on the following page-by-page analysis of the document "{document_name}", \
provide a comprehensive document summary:

{page_analyses}

Please provide:
1. **Executive Summary**: A brief overview of the entire document (2-3 sentences)
2. **Main Topics**: Key themes and subjects covered throughout the document
3. **Key Findings**: Important insights, data points, or conclusions
4. **Document Structure**: How the document is organized and its flow
5. **Notable Elements**: Any significant charts, tables, images, or special formatting
6. **Content Quality**: Assessment of the document's clarity, completeness, and usefulness
7. **Recommendations**: Suggested actions or next steps based on the content (if applicable)
8. If the document is a profit and loss statement or balance sheet, provide the \
information and data in table format, using the statement periods as the columns
9. If the document is a deed of establishment, list every director name, each \
director's birth date, and the date of the deed of establishment

Format your response clearly with headers and bullet points where appropriate."""


def build_summary_prompt(page_texts: list[str], document_name: str) -> str:
    """Join page analyses as "Page N: <text>" blocks into the summary prompt."""
    page_analyses = "\n\n".join(
        f"Page {number}: {text}" for number, text in enumerate(page_texts, start=1)
    )
    return SUMMARY_PROMPT.format(
        document_name=document_name, page_analyses=page_analyses
    )
