"""
HTML Escaping Utilities for Telegram HTML Mode

Customer names, phones, addresses, comments and backend error texts end up
inside HTML-formatted Telegram messages and must be escaped first.
Localized templates are trusted and never escaped.
"""

import html
from typing import Optional


def safe_html(text: Optional[str]) -> str:
    """
    Escapes HTML special characters in user-provided text.

    Examples:
        >>> safe_html("Торт <Наполеон>")
        'Торт &lt;Наполеон&gt;'

        >>> safe_html(None)
        ''
    """
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def format_amount(value: float) -> str:
    """
    Render a money amount without a trailing ".0" for whole numbers.

    Examples:
        >>> format_amount(1500.0)
        '1500'
        >>> format_amount(1312.5)
        '1312.5'
    """
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip('0').rstrip('.')
