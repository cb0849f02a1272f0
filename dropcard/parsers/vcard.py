"""
Lenient vCard reader for scanned codes.

Only the subset of vCard that business card QR codes carry in practice
is understood. Parsing is line oriented and forgiving: unknown lines are
skipped, partial cards are accepted, and nothing raises.

Recognized lines (prefixes are case-sensitive):
    FN:, EMAIL:, TEL:, ORG:, TITLE:, URL:, NOTE:, ROLE:
    ADR:         ;-separated, street..country joined with ", "
    ...TYPE=WORK...TEL:   work phone (also HOME, FAX)
    X-SOCIALPROFILE...    linkedin / twitter profile URLs
    X-<NAME>:    any other extension, keyed by lowercased name
"""

VCARD_MARKER = "BEGIN:VCARD"

# Simple "PREFIX:value" lines and the record field each one fills
PREFIX_FIELDS: tuple[tuple[str, str], ...] = (
    ("FN:", "name"),
    ("EMAIL:", "email"),
    ("TEL:", "phone"),
    ("ORG:", "company"),
    ("TITLE:", "title"),
    ("URL:", "website"),
    ("NOTE:", "notes"),
    ("ROLE:", "role"),
)

# TYPE= parameter on a TEL line and the field it fills
TYPED_PHONE_FIELDS: tuple[tuple[str, str], ...] = (
    ("TYPE=WORK", "workPhone"),
    ("TYPE=HOME", "homePhone"),
    ("TYPE=FAX", "fax"),
)

SOCIAL_NETWORKS: tuple[str, ...] = ("linkedin", "twitter")

# ADR components: PO box; extended; street; city; region; postal code; country
ADR_PREFIX = "ADR:"
ADR_COMPONENT_SLICE = slice(2, 7)


def _parse_address(value: str) -> str:
    parts = value.split(";")[ADR_COMPONENT_SLICE]
    return ", ".join(part for part in parts if part)


def _parse_typed_phone(line: str) -> tuple[str, str] | None:
    if "TEL:" not in line:
        return None
    for type_param, field_name in TYPED_PHONE_FIELDS:
        if type_param in line:
            return field_name, line[line.rindex("TEL:") + len("TEL:") :]
    return None


def _parse_social_profile(line: str) -> tuple[str, str] | None:
    if "X-SOCIALPROFILE" not in line:
        return None
    lowered = line.lower()
    for network in SOCIAL_NETWORKS:
        if network in lowered:
            start = line.find("http")
            if start == -1:
                # No URL, keep whatever follows the property name
                start = line.find(":") + 1
            return network, line[start:]
    return None


def _parse_extension(line: str) -> tuple[str, str] | None:
    if not line.startswith("X-") or ":" not in line:
        return None
    name, _, value = line[2:].partition(":")
    field_name = name.lower().replace("-", "")
    if not field_name or not value:
        return None
    return field_name, value


def parse_vcard(text: str) -> dict[str, str] | None:
    """
    Extract contact fields from vCard text.

    Args:
        text: Raw scanned text

    Returns:
        Field map (name, email, phone, company, title, website, notes,
        role, address, workPhone, homePhone, fax, linkedin, twitter and
        lowercased X- extensions), or None when the text is not a vCard
        or no field was recognized.
    """
    if not isinstance(text, str) or VCARD_MARKER not in text:
        return None

    fields: dict[str, str] = {}

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        typed = _parse_typed_phone(line)
        if typed:
            fields[typed[0]] = typed[1]
            continue

        social = _parse_social_profile(line)
        if social:
            fields[social[0]] = social[1]
            continue

        if line.startswith(ADR_PREFIX):
            address = _parse_address(line[len(ADR_PREFIX) :])
            if address:
                fields["address"] = address
            continue

        matched = False
        for prefix, field_name in PREFIX_FIELDS:
            if line.startswith(prefix):
                fields[field_name] = line[len(prefix) :]
                matched = True
                break
        if matched:
            continue

        extension = _parse_extension(line)
        if extension:
            fields[extension[0]] = extension[1]

        # Anything else (BEGIN, VERSION, N:, PHOTO, ...) is skipped

    if not fields:
        return None
    return fields
