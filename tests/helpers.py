# tests/helpers.py

from ogrlayer import Envelope, Layer

def collect(layer: Layer, field: str = "name") -> list:
    """Drain layer.features() and return the values of one field, in cursor order."""
    return [feature.field(field) for feature in layer.features()]

def assert_envelope_close(current: Envelope, expected: Envelope, tolerance: float = 1e-9):
    """Check that two envelopes match coordinate by coordinate."""
    for attr in ("min_x", "max_x", "min_y", "max_y"):
        diff = abs(getattr(current, attr) - getattr(expected, attr))
        assert diff <= tolerance, \
            f"{attr} mismatch: {getattr(current, attr)} != {getattr(expected, attr)} (Tol: {tolerance})"
