import bleach


def clean_text(value):
    """Strip all markup and surrounding whitespace from free text."""
    return bleach.clean((value or '').strip(), tags=set(), attributes={}, strip=True)
