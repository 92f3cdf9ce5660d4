"""
User editor field updates

Each form change is one command object. apply_update() dispatches on the
command type and refuses anything it does not know.
"""

from typing import Union

from console.models import (
    SOCIAL_PLATFORMS,
    DataValidationError,
    User,
    parse_date,
    parse_number,
)

BASIC_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
}
PROMO_FIELDS = ("code", "discountPercentage", "startDate", "endDate")


class UpdateBasicInfo:
    """Sets firstName, lastName or email"""

    def __init__(self, field: str, value: str):
        if field not in BASIC_FIELDS:
            raise DataValidationError(
                f"Unknown user field {field!r}. Accepted: {', '.join(BASIC_FIELDS)}"
            )
        self.field = field
        self.value = value

    def __repr__(self):
        return f"<UpdateBasicInfo {self.field}={self.value!r}>"


class UpdateSocial:
    """Sets or clears one social media handle"""

    def __init__(self, platform: str, value: str):
        if platform not in SOCIAL_PLATFORMS:
            raise DataValidationError(
                f"Unknown social platform {platform!r}. "
                f"Accepted: {', '.join(SOCIAL_PLATFORMS)}"
            )
        self.platform = platform
        self.value = value

    def __repr__(self):
        return f"<UpdateSocial {self.platform}={self.value!r}>"


class UpdatePromo:
    """Sets one field of the user's promo code"""

    def __init__(self, field: str, value):
        if field not in PROMO_FIELDS:
            raise DataValidationError(
                f"Unknown promo field {field!r}. Accepted: {', '.join(PROMO_FIELDS)}"
            )
        self.field = field
        self.value = value

    def __repr__(self):
        return f"<UpdatePromo {self.field}={self.value!r}>"


EditorCommand = Union[UpdateBasicInfo, UpdateSocial, UpdatePromo]


def apply_update(user: User, command: EditorCommand) -> User:
    """Applies a single field update to a draft User in place"""
    if isinstance(command, UpdateBasicInfo):
        value = command.value if command.value is not None else ""
        if not isinstance(value, str):
            raise DataValidationError(f"Field '{command.field}' must be a string")
        setattr(user, BASIC_FIELDS[command.field], value)
    elif isinstance(command, UpdateSocial):
        user.set_social(command.platform, command.value)
    elif isinstance(command, UpdatePromo):
        _apply_promo(user, command)
    else:
        raise TypeError(f"Unsupported editor command: {command!r}")
    return user


def _apply_promo(user: User, command: UpdatePromo):
    promo = user.promo_code
    if command.field == "code":
        if not isinstance(command.value, str):
            raise DataValidationError("Field 'code' must be a string")
        promo.code = command.value
    elif command.field == "discountPercentage":
        promo.discount_percentage = parse_number("discountPercentage", command.value)
    elif command.field == "startDate":
        promo.start_date = parse_date("startDate", command.value)
    else:
        promo.end_date = parse_date("endDate", command.value)


def command_from_dict(data: dict) -> EditorCommand:
    """
    Builds a command from its JSON form

    {"type": "basic", "field": "firstName", "value": "Ada"}
    {"type": "social", "platform": "twitter", "value": "@ada"}
    {"type": "promo", "field": "discountPercentage", "value": 15}
    """
    if not isinstance(data, dict):
        raise DataValidationError("Each update must be an object")
    kind = data.get("type")
    try:
        if kind == "basic":
            return UpdateBasicInfo(data["field"], data.get("value"))
        if kind == "social":
            return UpdateSocial(data["platform"], data.get("value"))
        if kind == "promo":
            return UpdatePromo(data["field"], data.get("value"))
    except KeyError as error:
        raise DataValidationError(
            f"Invalid {kind} update: missing '{error.args[0]}'"
        ) from error
    raise DataValidationError(
        f"Unknown update type {kind!r}. Accepted: basic, social, promo"
    )
