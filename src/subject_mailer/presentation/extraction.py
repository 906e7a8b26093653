"""
Split generated email text into a displayable subject and body.

Model output is free text; a "Subject:" line may be missing, so callers pass
the original subject to build a default.
"""

import re

SUBJECT_LINE = re.compile(r"Subject:\s*(.+)", re.IGNORECASE)
SUBJECT_LINE_WITH_BREAKS = re.compile(r"Subject:\s*.+\n*", re.IGNORECASE)


def extract_email_subject(email: str, original_subject: str) -> str:
    """
    Return the text after the first "Subject:" marker, or "Re: <original>".
    
    Examples:
        >>> extract_email_subject("Subject: Re: Hi\\n\\nHello,", "Hi")
        'Re: Hi'
        >>> extract_email_subject("Hello,", "Hi")
        'Re: Hi'
    """
    match = SUBJECT_LINE.search(email)
    if match:
        return match.group(1).rstrip()
    return f"Re: {original_subject}"


def extract_email_body(email: str) -> str:
    """Remove the first "Subject:" line (and following newlines), then trim."""
    return SUBJECT_LINE_WITH_BREAKS.sub("", email, count=1).strip()
