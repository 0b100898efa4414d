import re

# 8 digits followed by the control letter, e.g. "49021740T"
DNI_PATTERN = re.compile(r"^[0-9]{8}[A-Z]$")
DNI_PREFIX = "0019-0"


def format_user(user: str) -> str:
    """
    Normalize a BBVA login identifier.

    BBVA accepts two kinds of identifiers:
    - a 7 character customer code, sent as is (upper-cased)
    - a DNI, sent with a fixed prefix: "49021740T" becomes "0019-049021740T"
    """
    user = user.upper()
    if DNI_PATTERN.match(user):
        return DNI_PREFIX + user
    return user
