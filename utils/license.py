import re
from typing import Optional

# Dutch sidecodes 1-14, each as its dash separated groups
SIDECODES = [
    (r"[A-Z]{2}", r"\d{2}", r"\d{2}"),
    (r"\d{2}", r"\d{2}", r"[A-Z]{2}"),
    (r"\d{2}", r"[A-Z]{2}", r"\d{2}"),
    (r"[A-Z]{2}", r"\d{2}", r"[A-Z]{2}"),
    (r"[A-Z]{2}", r"[A-Z]{2}", r"\d{2}"),
    (r"\d{2}", r"[A-Z]{2}", r"[A-Z]{2}"),
    (r"\d{2}", r"[A-Z]{3}", r"\d"),
    (r"\d", r"[A-Z]{3}", r"\d{2}"),
    (r"[A-Z]{2}", r"\d{3}", r"[A-Z]"),
    (r"[A-Z]", r"\d{3}", r"[A-Z]{2}"),
    (r"[A-Z]{3}", r"\d{2}", r"[A-Z]"),
    (r"[A-Z]", r"\d{2}", r"[A-Z]{3}"),
    (r"\d", r"[A-Z]{2}", r"\d{3}"),
    (r"\d{3}", r"[A-Z]{2}", r"\d"),
]

_PATTERNS = [re.compile("^" + "".join(f"({g})" for g in groups) + "$") for groups in SIDECODES]

def normalize(license: str) -> str:
    """Upper case a user supplied plate and drop dashes and whitespace."""
    return re.sub(r"[\s-]", "", (license or "").upper())

def sidecode(license: str) -> Optional[int]:
    plate = normalize(license)
    for idx, pattern in enumerate(_PATTERNS, start=1):
        if pattern.match(plate):
            return idx
    return None

def is_valid(license: str) -> bool:
    return sidecode(license) is not None

def format_license(license: str) -> str:
    """Return the display form of a plate, e.g. AB123C -> AB-123-C.

    Plates that match no sidecode come back normalised but without dashes.
    """
    plate = normalize(license)
    for pattern in _PATTERNS:
        m = pattern.match(plate)
        if m:
            return "-".join(m.groups())
    return plate
