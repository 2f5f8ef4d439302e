import re

# 09 followed by 9 digits, e.g. 09121234567
PHONE_NUMBER_RE = re.compile(r"^09[0-9]{9}$")


def normalize_phone_number(value: str) -> str:
    if not value:
        return ""
    return re.sub(r"[\s-]", "", value)


def is_valid_phone_number(value: str) -> bool:
    return bool(PHONE_NUMBER_RE.match(normalize_phone_number(value)))
