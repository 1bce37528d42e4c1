"""
Request payload schemas.

Each entity has one schema used by both create and update. ``validate_payload``
runs it in full mode (required fields enforced, omitted fields returned as
None) or partial mode (only supplied fields are validated and returned).
"""

from datetime import date, datetime
from typing import ClassVar, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    constr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from gameshelf.constants import (
    CATALOG_NAME_MAX_LENGTH,
    CREDIT_MAX_LENGTH,
    GAME_NAME_MAX_LENGTH,
    MANUFACTURER_MAX_LENGTH,
    MAX_DB_INTEGER,
    MAX_RATING,
    MIN_RATING,
    MIN_RELEASE_YEAR,
    NAME_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    RELEASE_YEAR_LOOKAHEAD,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from gameshelf.exceptions import ValidationException

_http_url = TypeAdapter(HttpUrl)
_email = TypeAdapter(EmailStr)

CatalogName = constr(strip_whitespace=True, min_length=NAME_MIN_LENGTH, max_length=CATALOG_NAME_MAX_LENGTH)
GameName = constr(strip_whitespace=True, min_length=NAME_MIN_LENGTH, max_length=GAME_NAME_MAX_LENGTH)
Credit = constr(strip_whitespace=True, max_length=CREDIT_MAX_LENGTH)
Manufacturer = constr(strip_whitespace=True, max_length=MANUFACTURER_MAX_LENGTH)
Text = constr(strip_whitespace=True)
Username = constr(strip_whitespace=True, min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)


def max_release_year():
    return datetime.now().year + RELEASE_YEAR_LOOKAHEAD


class PayloadSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    # Fields that must be present (and non-null) on create and non-null on update
    required_fields: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class GenrePayload(PayloadSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[CatalogName] = None
    description: Optional[Text] = None


class PlatformPayload(PayloadSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[CatalogName] = None
    manufacturer: Optional[Manufacturer] = None
    release_year: Optional[int] = None

    @field_validator("release_year")
    @classmethod
    def check_release_year(cls, value):
        if value is None:
            return value
        upper = max_release_year()
        if value < MIN_RELEASE_YEAR or value > upper:
            raise ValueError(f"Release year must be between {MIN_RELEASE_YEAR} and {upper}")
        return value


class GamePayload(PayloadSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("name", "genre_id", "platform_id")

    name: Optional[GameName] = None
    description: Optional[Text] = None
    rating: Optional[float] = Field(None, ge=MIN_RATING, le=MAX_RATING)
    release_date: Optional[date] = None
    developer: Optional[Credit] = None
    publisher: Optional[Credit] = None
    image_url: Optional[Text] = None
    genre_id: Optional[int] = Field(None, ge=1, le=MAX_DB_INTEGER)
    platform_id: Optional[int] = Field(None, ge=1, le=MAX_DB_INTEGER)

    @field_validator("rating")
    @classmethod
    def round_rating(cls, value):
        return None if value is None else round(value, 1)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value):
        if not value:
            return value
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("Image URL must be a valid URL")
        return value


class RegistrationPayload(PayloadSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("username", "email", "password", "confirm_password")

    username: Optional[Username] = None
    email: Optional[Text] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        # Stored as submitted; login matches it exactly
        if value is None:
            return value
        try:
            _email.validate_python(value)
        except ValidationError:
            raise ValueError("Email must be a valid email address")
        return value

    @model_validator(mode="after")
    def check_passwords(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if self.password is not None and len(self.password) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        return self


class LoginPayload(PayloadSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("username", "password")

    username: Optional[Text] = None
    password: Optional[str] = None


def _format_errors(error):
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        message = err["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{location}: {message}" if location else message)
    return ", ".join(messages)


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def validate_payload(schema, data, partial=False):
    """
    Validate a request body against ``schema``.

    Returns a dict keyed by model attribute names. In partial mode only the
    supplied fields are returned so callers can apply them as-is.
    """
    if not isinstance(data, dict):
        raise ValidationException("Request body must be a JSON object")

    missing = []
    for name in schema.required_fields:
        alias = schema.model_fields[name].alias or name
        key = alias if alias in data else name
        if key in data:
            if _is_blank(data[key]):
                missing.append(alias)
        elif not partial:
            missing.append(alias)

    if missing:
        if partial:
            raise ValidationException(f"Field(s) cannot be empty: {', '.join(missing)}")
        raise ValidationException(f"Missing required field(s): {', '.join(missing)}")

    try:
        payload = schema.model_validate(data)
    except ValidationError as e:
        raise ValidationException(_format_errors(e))

    return payload.model_dump(exclude_unset=partial)
