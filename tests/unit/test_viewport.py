from src.schemas.charts import Viewport
from src.services.viewport import ViewportSignal


def test_burst_is_coalesced(clock):
    signal = ViewportSignal(100, clock=clock)
    for width in (500, 520, 540):
        signal.push(Viewport(width=width, height=300))
        clock.advance(0.05)
    assert signal.settle() is None
    clock.advance(0.06)
    assert signal.settle() == Viewport(width=540, height=300)
    assert signal.settle() is None


def test_nothing_pending(clock):
    signal = ViewportSignal(100, clock=clock)
    clock.advance(1)
    assert not signal.pending
    assert signal.settle() is None
