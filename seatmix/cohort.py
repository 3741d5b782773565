import re

_LEADING_DIGITS = re.compile(r"^\d+")

def cohort_of(label: str) -> str:
    """Coarse cohort of a class label: its leading digit run ("7A" -> "7").

    Labels without a numeric prefix are their own cohort.
    """
    m = _LEADING_DIGITS.match(label)
    return m.group(0) if m else label
