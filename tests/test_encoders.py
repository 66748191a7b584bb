import torch
import pytest
from adaptive_scalar_encoder import AdaptiveScalarEncoder
from encoders import ScalarSdrEncoder


# --- Test Fixture to create a default torch-facing encoder ---
@pytest.fixture
def sdr_encoder():
    """Provides a ScalarSdrEncoder with 50 bits and 5 active bits."""
    return ScalarSdrEncoder(w=5, n=50)


def test_forward_shapes_and_dtype(sdr_encoder):
    out = sdr_encoder(torch.tensor([10.0, 20.0, 15.0]))
    assert out.shape == (3, sdr_encoder.output_dims)
    assert out.dtype == torch.float32
    assert torch.all(out.sum(dim=1) == 5), "Every real reading should activate w bits."
    assert int(sdr_encoder.records_seen) == 3


def test_nan_readings_encode_to_zeros(sdr_encoder):
    out = sdr_encoder(torch.tensor([float("nan"), 4.0, float("nan")]))
    assert not out[0].any()
    assert out[1].any()
    assert not out[2].any()


def test_training_mode_adapts_range(sdr_encoder):
    sdr_encoder.train()
    sdr_encoder(torch.tensor([0.0, 100.0]))
    assert sdr_encoder.scalar_encoder.max_val == 100.0


def test_eval_mode_freezes_range(sdr_encoder):
    sdr_encoder(torch.tensor([0.0, 100.0]))
    sdr_encoder.eval()
    out = sdr_encoder(torch.tensor([500.0, 100.0]))
    assert sdr_encoder.scalar_encoder.max_val == 100.0
    assert torch.equal(out[0], out[1]), "Frozen encoder should clip to the top bucket."


def test_wraps_existing_encoder():
    encoder = AdaptiveScalarEncoder(w=3, n=20, min_val=0.0, max_val=17.0)
    module = ScalarSdrEncoder(encoder)
    assert module.scalar_encoder is encoder
    assert module.output_dims == 20
    assert "n=20" in repr(module)


def test_rejects_batched_input(sdr_encoder):
    with pytest.raises(ValueError):
        sdr_encoder(torch.zeros(2, 3))


def test_respects_wrapped_encoder_learning_setting():
    encoder = AdaptiveScalarEncoder(w=5, n=50, min_val=0.0, max_val=10.0, learning_enabled=False)
    module = ScalarSdrEncoder(encoder)
    module.train()
    module(torch.tensor([100.0]))
    assert encoder.max_val == 10.0, "A frozen encoder must stay frozen in training mode."
    assert encoder.learning_enabled is False


def test_eval_pass_does_not_freeze_wrapped_encoder():
    encoder = AdaptiveScalarEncoder(w=5, n=50, min_val=0.0, max_val=10.0)
    module = ScalarSdrEncoder(encoder)
    module.eval()
    module(torch.tensor([100.0]))
    assert encoder.max_val == 10.0
    assert encoder.learning_enabled is True
    encoder.encode(100.0)
    assert encoder.max_val == 100.0
