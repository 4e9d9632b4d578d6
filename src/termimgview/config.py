import math
from dataclasses import dataclass

from termimgview.charsets import ASCII, BLOCKS, BUILTIN_RAMPS
from termimgview.errors import ConfigError

# Width / height of a typical terminal font cell (8 / 17)
FONT_ASPECT_RATIO = 0.47058824


@dataclass(frozen=True)
class ShadeMethod:
    name: str
    ramp: str

    @classmethod
    def parse(cls, text: str) -> "ShadeMethod":
        """Resolve a built-in ramp by name (case-insensitive), otherwise treat text as a custom ramp."""
        key = text.lower()
        if key in BUILTIN_RAMPS:
            return cls(name=key, ramp=BUILTIN_RAMPS[key])
        if not text:
            raise ConfigError("shade-method", "custom glyph ramp must not be empty")
        return cls(name="custom", ramp=text)


SHADE_ASCII = ShadeMethod(name="ascii", ramp=ASCII)
SHADE_BLOCKS = ShadeMethod(name="blocks", ramp=BLOCKS)


@dataclass(frozen=True)
class RenderConfig:
    scale: float = 1.0
    aspect_ratio_adjust: float = FONT_ASPECT_RATIO
    grayscale: bool = False
    invert: bool = False
    brightness: float = 1.0
    hue_rotation_degrees: float = 0.0
    shade_method: ShadeMethod = SHADE_BLOCKS
    colour: bool = True
    remove_background: tuple[int, int, int] | None = None
    background_tolerance: float = 10.0

    def validate(self) -> "RenderConfig":
        """Check every option, raising ConfigError naming the first bad one. Returns self."""
        _require_finite("scale", self.scale)
        if self.scale <= 0:
            raise ConfigError("scale", f"must be positive, got {self.scale}")
        _require_finite("adjust-aspect-ratio", self.aspect_ratio_adjust)
        if self.aspect_ratio_adjust <= 0:
            raise ConfigError("adjust-aspect-ratio", f"must be positive, got {self.aspect_ratio_adjust}")
        _require_finite("brightness", self.brightness)
        if self.brightness < 0:
            raise ConfigError("brightness", f"must not be negative, got {self.brightness}")
        _require_finite("hue-rotation", self.hue_rotation_degrees)
        if not self.shade_method.ramp:
            raise ConfigError("shade-method", "glyph ramp must not be empty")
        if self.remove_background is not None:
            if len(self.remove_background) != 3 or not all(0 <= c <= 255 for c in self.remove_background):
                raise ConfigError("remove-bg", f"expected three channels in 0-255, got {self.remove_background}")
        _require_finite("bg-tolerance", self.background_tolerance)
        if self.background_tolerance < 0:
            raise ConfigError("bg-tolerance", f"must not be negative, got {self.background_tolerance}")
        return self


def _require_finite(option: str, value: float) -> None:
    if not math.isfinite(value):
        raise ConfigError(option, f"must be a finite number, got {value}")
