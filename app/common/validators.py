"""
Validators for Indian tax identifiers and form input
"""
import re
from typing import List, Optional, Union


GSTIN_LENGTH = 15
_GSTIN_PATTERN = re.compile(r'^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][0-9A-Z]Z[0-9A-Z]$')
_GSTIN_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def normalize_gstin(gstin: Optional[str]) -> Optional[str]:
    """
    Strip spaces and upper-case a GSTIN. Empty input becomes None.
    """
    if gstin is None:
        return None
    cleaned = re.sub(r'\s', '', gstin).upper()
    return cleaned or None


def gstin_check_character(gstin_body: str) -> str:
    """
    Compute the GSTIN check character for the first 14 characters.

    Mod-36 scheme: each character's index in the charset is multiplied by an
    alternating factor (1, 2, 1, ...), the quotient and remainder of each
    product by 36 are summed, and the check is (36 - sum % 36) % 36.
    """
    total = 0
    for i, char in enumerate(gstin_body):
        product = _GSTIN_CHARSET.index(char) * (1 if i % 2 == 0 else 2)
        total += product // 36 + product % 36
    return _GSTIN_CHARSET[(36 - total % 36) % 36]


def validate_gstin(gstin: str) -> bool:
    """
    Validate a full 15 character GSTIN.
    - 2 digit state code
    - 10 character PAN
    - entity number, literal 'Z', check character
    """
    cleaned = normalize_gstin(gstin)
    if not cleaned or len(cleaned) != GSTIN_LENGTH:
        return False

    if not _GSTIN_PATTERN.match(cleaned):
        return False

    return gstin_check_character(cleaned[:14]) == cleaned[14]


def gstin_state_code(gstin: str) -> Optional[str]:
    """State code embedded in the first two digits of a GSTIN"""
    cleaned = normalize_gstin(gstin)
    if not cleaned or len(cleaned) < 2 or not cleaned[:2].isdigit():
        return None
    return cleaned[:2]


def validate_email_address(email: str) -> bool:
    if not email:
        return False
    return bool(_EMAIL_PATTERN.match(email.strip()))


def split_address_lines(address: Union[str, List[str], None]) -> List[str]:
    """
    Turn free-text (one line per row) or a list into trimmed, non-blank lines.
    """
    if address is None:
        return []
    if isinstance(address, str):
        lines = address.split('\n')
    else:
        lines = list(address)
    return [line.strip() for line in lines if line and line.strip()]
