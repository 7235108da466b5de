from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FitIn(str, Enum):
    """How the image is constrained within the requested size."""
    NONE = "none"
    NORMAL = "fit-in"
    ADAPTIVE = "adaptive-fit-in"


class HorizontalAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlign(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class EncryptionMode(str, Enum):
    """Signing scheme used for the secure URL."""
    HMAC_SHA1 = "hmac-sha1"
    AES128 = "aes128"


class Size(BaseModel):
    """Target size in pixels. Zero means unset."""
    model_config = ConfigDict(frozen=True)

    width: int = 0
    height: int = 0

    @property
    def is_zero(self) -> bool:
        return self.width == 0 and self.height == 0


class Rect(BaseModel):
    """Crop rectangle given by origin and extent. The zero rect means unset."""
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.width == 0 and self.height == 0


class Filter(BaseModel):
    """A named image filter with its ordered arguments."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Filter name, e.g. quality")
    arguments: Tuple[str, ...] = Field(
        default=(),
        description="Ordered filter arguments"
    )

    @field_validator("arguments", mode="before")
    @classmethod
    def stringify_arguments(cls, v):
        """Accept any argument values and keep their string form.

        A single string is one argument, not a sequence of characters.
        """
        if isinstance(v, bytes):
            v = v.decode("utf-8")
        if isinstance(v, str):
            return (v,)
        return tuple(str(arg) for arg in v)

    @classmethod
    def create(cls, name: str, *arguments) -> "Filter":
        """Build a filter from a name and a variable argument list.

        Example:
            Filter.create("quality", 80)
        """
        return cls(name=name, arguments=arguments)

    def render(self) -> str:
        return f"{self.name}({','.join(self.arguments)})"


class TransformOptions(BaseModel):
    """Image transformation options encoded into a secure URL.

    All fields start unset (zero, false or the neutral enum member) except
    ``scale``, which defaults to 1.0. Assignments are validated, so a
    mutated copy stays well-formed.
    """
    model_config = ConfigDict(validate_assignment=True)

    target_size: Size = Field(default_factory=Size)
    crop: Rect = Field(default_factory=Rect)
    smart: bool = False
    debug: bool = False
    meta: bool = False
    hflip: bool = False
    vflip: bool = False
    fit_in: FitIn = FitIn.NONE
    halign: HorizontalAlign = HorizontalAlign.CENTER
    valign: VerticalAlign = VerticalAlign.MIDDLE
    scale: float = 1.0
    filters: List[Filter] = Field(default_factory=list)
    encryption: EncryptionMode = EncryptionMode.HMAC_SHA1

    def copy(self) -> "TransformOptions":
        """Return an independent field-by-field copy."""
        return self.model_copy(deep=True)

    def with_size(self, width: int, height: int) -> "TransformOptions":
        """Return a copy of these options with a different target size."""
        options = self.copy()
        options.target_size = Size(width=width, height=height)
        return options
