"""ANSI escape sequences used for terminal colors.

Members of :class:`Color` are plain strings and can be concatenated directly
into output.  ``ANSI`` exposes the same table as a read-only name → escape
mapping.
"""

from enum import StrEnum
from types import MappingProxyType


class Color(StrEnum):
    # Regular text
    BLK = "\033[0;30m"
    RED = "\033[0;31m"
    GRN = "\033[0;32m"
    YEL = "\033[0;33m"
    BLU = "\033[0;34m"
    MAG = "\033[0;35m"
    CYN = "\033[0;36m"
    WHT = "\033[0;37m"

    # Bold text
    BBLK = "\033[1;30m"
    BRED = "\033[1;31m"
    BGRN = "\033[1;32m"
    BYEL = "\033[1;33m"
    BBLU = "\033[1;34m"
    BMAG = "\033[1;35m"
    BCYN = "\033[1;36m"
    BWHT = "\033[1;37m"

    # Underlined text
    UBLK = "\033[4;30m"
    URED = "\033[4;31m"
    UGRN = "\033[4;32m"
    UYEL = "\033[4;33m"
    UBLU = "\033[4;34m"
    UMAG = "\033[4;35m"
    UCYN = "\033[4;36m"
    UWHT = "\033[4;37m"

    # Background
    BLKB = "\033[40m"
    REDB = "\033[41m"
    GRNB = "\033[42m"
    YELB = "\033[43m"
    BLUB = "\033[44m"
    MAGB = "\033[45m"
    CYNB = "\033[46m"
    WHTB = "\033[47m"

    # High intensity background
    BLKHB = "\033[0;100m"
    REDHB = "\033[0;101m"
    GRNHB = "\033[0;102m"
    YELHB = "\033[0;103m"
    BLUHB = "\033[0;104m"
    MAGHB = "\033[0;105m"
    CYNHB = "\033[0;106m"
    WHTHB = "\033[0;107m"

    # High intensity text
    HBLK = "\033[0;90m"
    HRED = "\033[0;91m"
    HGRN = "\033[0;92m"
    HYEL = "\033[0;93m"
    HBLU = "\033[0;94m"
    HMAG = "\033[0;95m"
    HCYN = "\033[0;96m"
    HWHT = "\033[0;97m"

    # Bold high intensity text
    BHBLK = "\033[1;90m"
    BHRED = "\033[1;91m"
    BHGRN = "\033[1;92m"
    BHYEL = "\033[1;93m"
    BHBLU = "\033[1;94m"
    BHMAG = "\033[1;95m"
    BHCYN = "\033[1;96m"
    BHWHT = "\033[1;97m"

    RST = "\033[0m"


ANSI: MappingProxyType[str, str] = MappingProxyType(
    {member.name: member.value for member in Color}
)


def colorize(text: str, color: Color, *, enabled: bool = True) -> str:
    """Wrap *text* in *color* and a reset code, or return it untouched."""
    if not enabled:
        return text
    return f"{color}{text}{Color.RST}"


def contains_escape(text: str) -> bool:
    """Return ``True`` if *text* contains an ESC control byte."""
    return "\033" in text
