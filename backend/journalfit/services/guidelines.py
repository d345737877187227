"""
JournalFit Backend — Journal Guideline Store
==============================================

What:  Static lookup of style-guide text by template identifier.
Who:   Provider services, when building a formatting prompt.

Keys are the `templateId` values providers put in their recommendations
and clients send back to the generate-by-template endpoints. A templateId
without an entry is normal (providers invent them) and gets the fallback.
"""

from typing import Dict

DEFAULT_GUIDELINES = "Follow common academic publishing standards."

JOURNAL_GUIDELINES: Dict[str, str] = {
    # TODO: replace the template-N placeholders with real author guidelines
    # once the client ships its journal catalogue.
    "template-1": (
        "Use an IMRaD structure. Keep language formal and concise. Add clear headings."
    ),
    "template-2": (
        "Use a structured abstract, then IMRaD. Ensure consistent terminology and citations."
    ),
    "Ca-A Cancer Journal for Clinicians": """CA: A Cancer Journal for Clinicians - Author Guidelines

    JOURNAL FOCUS:
    - Comprehensive multidisciplinary reviews
    - American Cancer Society (ACS) guidelines
    - "Cancer Statistics" articles
    - Target audience: oncologists, primary care providers, and public health professionals
    - All manuscripts must be written in an accessible, non-specialized style

    SUBMISSION REQUIREMENTS:
    - Most articles are solicited
    - Original research (excluding ACS statistics), Case Reports, and Letters to the Editor are generally not accepted
    - All unsolicited manuscripts must receive editorial approval before submission
    - Pre-submission inquiry required: email ca.edoff@cancer.org with outline, abstract, full author list, and manuscript length
    - Formal submissions via ScholarOne Manuscripts in .DOC, .DOCX, or .RTF formats
    - Review article length: typically 25 to 40 double-spaced pages

    CONTENT AND LANGUAGE STANDARDS:
    - Use patient-centric language that avoids associating gender with cancer (e.g., "people with breast cancer" not "women with breast cancer")
    - Avoid labeling people by their disease (e.g., "patients with cancer" not "cancer patients")
    - Recommendations should be clear and direct (e.g., "we suggest/recommend" rather than "consider")
    - Authors are encouraged to include individuals with lived experience of the disease as authors where appropriate
    - Articles written with industry assistance will not be considered

    PUBLICATION FEES AND OPEN ACCESS:
    - No submission fees or page charges
    - Journal is Open Access
    - Standard Article Publication Charge (APC): $4,330 USD
    - Articles published under CC-BY-NC-ND license are currently free of charge
    - Authors must provide documentation for any figures or tables reproduced from other sources
    - Patient consent forms required where necessary
""",
}


def get_guidelines(template_id: str) -> str:
    """Guideline text for `template_id`, or the generic fallback. Never raises."""
    return JOURNAL_GUIDELINES.get(template_id, DEFAULT_GUIDELINES)
