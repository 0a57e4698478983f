"""Homebrew repeater protocol command tokens.

Opaque, immutable strings. Inbound frames are matched against them by
prefix; no parsing or authentication happens here.
"""
from typing import FrozenSet, Optional, Union

# Data / master
DMRA: str = "DMRA"
DMRD: str = "DMRD"
MSTCL: str = "MSTCL"
MSTNAK: str = "MSTNAK"
MSTPONG: str = "MSTPONG"
MSTN: str = "MSTN"
MSTP: str = "MSTP"
MSTC: str = "MSTC"

# Repeater
RPTL: str = "RPTL"        # login request
RPTPING: str = "RPTPING"
RPTCL: str = "RPTCL"      # disconnect
RPTACK: str = "RPTACK"
RPTK: str = "RPTK"        # login challenge response
RPTC: str = "RPTC"        # config, or disconnect
RPTP: str = "RPTP"
RPTA: str = "RPTA"
RPTO: str = "RPTO"
RPTS: str = "RPTS"
RPTSBKN: str = "RPTSBKN"

COMMANDS: FrozenSet[str] = frozenset({
    DMRA, DMRD, MSTCL, MSTNAK, MSTPONG, MSTN, MSTP, MSTC,
    RPTL, RPTPING, RPTCL, RPTACK, RPTK, RPTC, RPTP, RPTA, RPTO, RPTS, RPTSBKN,
})

# longest first, so RPTPING wins over RPTP
_BY_LENGTH = tuple(sorted(COMMANDS, key=len, reverse=True))

def command_of(frame: Union[bytes, str]) -> Optional[str]:
    """Return the command token ``frame`` starts with, or None."""
    if isinstance(frame, (bytes, bytearray)):
        head = bytes(frame[:7]).decode("ascii", errors="replace")
    else:
        head = frame[:7]
    for cmd in _BY_LENGTH:
        if head.startswith(cmd):
            return cmd
    return None
