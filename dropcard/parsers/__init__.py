from dropcard.parsers.scan import decode_scan
from dropcard.parsers.vcard import parse_vcard

__all__ = [
    "decode_scan",
    "parse_vcard",
]
