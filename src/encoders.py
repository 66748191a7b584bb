# src/encoders.py
from typing import Optional

import numpy as np
import torch
import torch.nn as nn

from adaptive_scalar_encoder import AdaptiveScalarEncoder


class ScalarSdrEncoder(nn.Module):
    """
    Encodes a stream of raw scalar readings into binary SDRs for downstream
    torch components such as a spatial pooler.

    Wraps an AdaptiveScalarEncoder. In training mode the value range adapts to
    the data, provided the wrapped encoder has learning enabled; in eval mode
    the range is frozen and out-of-range readings are clipped. The wrapped
    encoder's own learning setting is left untouched. NaN entries are treated
    as missing data and encode to all zeros.
    """
    def __init__(self, encoder: Optional[AdaptiveScalarEncoder] = None, **encoder_kwargs):
        """
        Args:
            encoder (AdaptiveScalarEncoder): An existing encoder to wrap.
            **encoder_kwargs: Used to build a new AdaptiveScalarEncoder when
                `encoder` is not given.
        """
        super().__init__()
        self.scalar_encoder = encoder if encoder is not None else AdaptiveScalarEncoder(**encoder_kwargs)
        self.register_buffer("records_seen", torch.tensor(0, dtype=torch.int64))

    @property
    def output_dims(self) -> int:
        return self.scalar_encoder.get_width()

    def forward(self, x):
        """
        Args:
            x (torch.Tensor): Scalar readings of shape [seq_len].
        Returns:
            torch.Tensor: Float SDRs of shape [seq_len, output_dims].
        """
        if x.dim() != 1:
            raise ValueError(f"Expected a 1-D tensor of scalars, got shape {tuple(x.shape)}")

        values = x.detach().to("cpu", dtype=torch.float64).numpy()
        learning_enabled = self.scalar_encoder.learning_enabled
        self.scalar_encoder.set_learning_enabled(self.training and learning_enabled)
        try:
            sdrs = self.scalar_encoder.encode_batch(values)
        finally:
            self.scalar_encoder.set_learning_enabled(learning_enabled)
        self.records_seen += len(values)
        return torch.from_numpy(sdrs.astype(np.float32)).to(x.device)

    def extra_repr(self):
        enc = self.scalar_encoder
        return (f"w={enc.w}, n={enc.n}, min_val={enc.min_val}, max_val={enc.max_val}, "
                f"window_size={enc.config.window_size}")
