# contactscout/utils/extractor.py
import re
from typing import List, Optional

# Practical pattern, not RFC 5322: misses quoted local parts and IDN domains.
# ASCII word boundaries, so "联系info@example.com" still matches.
EMAIL_REGEX = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", re.ASCII)


def extract_emails(content: Optional[str]) -> List[str]:
    """
    Return every email-like string found in ``content``.

    Exact duplicates are dropped, first occurrence wins the position.
    No case folding: "a@b.com" and "A@B.COM" are two results.
    """
    if not content:
        return []
    return list(dict.fromkeys(EMAIL_REGEX.findall(content)))
