# src/encoder_config.py
from typing import Optional

from pydantic import BaseModel, ConfigDict

from sliding_window import DEFAULT_WINDOW_SIZE


class EncoderConfig(BaseModel):
    """
    Immutable settings of an adaptive scalar encoder.

    `n` and `w` are fixed for the lifetime of the encoder; the bounds given here
    are only the starting point, the encoder widens them as data arrives.
    Leaving `min_val == max_val` (the default) means the bounds are unset.
    """
    model_config = ConfigDict(frozen=True)

    w: int
    n: Optional[int] = None
    min_val: float = 0.0
    max_val: float = 0.0
    padding: Optional[int] = None
    # Only accepted so the unsupported resolution/radius sizing mode can be rejected.
    radius: Optional[float] = None
    resolution: Optional[float] = None
    window_size: int = DEFAULT_WINDOW_SIZE
    learning_enabled: bool = True
    periodic: bool = False
    clip_input: bool = True
    name: str = "[adaptive]"
    verbosity: int = 0

    @property
    def halfwidth(self) -> int:
        return (self.w - 1) // 2

    @property
    def effective_padding(self) -> int:
        return self.halfwidth if self.padding is None else self.padding
