"""Slug generation for post filenames and URLs"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text, flags=re.ASCII)
    text = re.sub(r'\s+', '-', text.strip())
    return re.sub(r'-+', '-', text).strip('-')
