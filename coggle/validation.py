"""Client-side checks run before a request is issued."""

import re

from .errors import InvalidOrganizationNameError, TextTooLongError

MAX_TEXT_LENGTH = 3000

ORG_NAME_PATTERN = re.compile(r"^[a-z]+[a-z0-9-]{2,}$")


def validate_text(text: str) -> str:
    """
    Ensure node text fits within MAX_TEXT_LENGTH characters.

    Raises:
        TextTooLongError: If the text is longer than the limit
    """
    if len(text) > MAX_TEXT_LENGTH:
        raise TextTooLongError(len(text), MAX_TEXT_LENGTH)
    return text


def validate_organization_name(organization: str) -> str:
    """
    Ensure an organization slug is lowercase, starts with a letter and is at
    least three characters long.

    Raises:
        InvalidOrganizationNameError: If the slug does not match ORG_NAME_PATTERN
    """
    if not ORG_NAME_PATTERN.fullmatch(organization):
        raise InvalidOrganizationNameError(organization)
    return organization
