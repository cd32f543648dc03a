"""
Helper utility functions
"""


def truncate_text(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """Keep the first ``max_length`` characters, marking cut text with ``suffix``"""
    if len(text) <= max_length:
        return text

    return text[:max_length] + suffix
