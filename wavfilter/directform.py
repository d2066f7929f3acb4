"""Direct-form IIR filters and fixed Butterworth designs at 48 kHz."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from itertools import islice

# 4th-order Butterworth high pass, 48 kHz sampling, 0.5 kHz cut-off.
HIGHPASS_A = (
    0.91911566251649501000,
    -3.67646265006598010000,
    5.51469397509896990000,
    -3.67646265006598010000,
    0.91911566251649501000,
)
HIGHPASS_B = (
    1.00000000000000000000,
    -3.82898609567844690000,
    5.50142959334597940000,
    -3.51519386532860700000,
    0.84276723741100146000,
)

# 4th-order Butterworth low pass, 48 kHz sampling, 1 kHz cut-off.
LOWPASS_A = (
    0.00001592264636101550,
    0.00006369058544406199,
    0.00009553587816609298,
    0.00006369058544406199,
    0.00001592264636101550,
)
LOWPASS_B = (
    1.00000000000000000000,
    -3.65806030240188340000,
    5.03143353336760680000,
    -3.08322830175881530000,
    0.71010389834158660000,
)


class DirectFormFilter:
    """An N-th order IIR filter in direct form I.

    ``a_coefficients`` weight the inputs, ``b_coefficients`` the outputs;
    ``b_coefficients[0]`` is assumed to be 1 and is not used.
    """

    def __init__(
        self, a_coefficients: Sequence[float], b_coefficients: Sequence[float]
    ) -> None:
        a = tuple(float(c) for c in a_coefficients)
        b = tuple(float(c) for c in b_coefficients)
        if not a:
            raise ValueError("at least one coefficient is needed")
        if len(a) != len(b):
            raise ValueError("a and b coefficient lists must be the same length")
        self.a_coefficients = a
        self.b_coefficients = b
        self.reset()

    @property
    def order(self) -> int:
        """Filter order."""
        return len(self.a_coefficients) - 1

    def reset(self) -> None:
        """Clear the input and output history."""
        size = len(self.a_coefficients)
        self._inputs: deque[float] = deque([0.0] * size, maxlen=size)
        self._outputs: deque[float] = deque([0.0] * size, maxlen=size)

    def process(self, sample: float) -> float:
        """Filter one sample and return the output sample."""
        a, b = self.a_coefficients, self.b_coefficients
        self._inputs.appendleft(float(sample))
        output = a[0] * self._inputs[0]
        for a_n, b_n, x_n, y_n in zip(
            a[1:], b[1:], islice(self._inputs, 1, None), self._outputs
        ):
            output += a_n * x_n - b_n * y_n
        self._outputs.appendleft(output)
        return output


def butterworth_highpass() -> DirectFormFilter:
    """A fresh 4th-order Butterworth high pass (48 kHz, 500 Hz)."""
    return DirectFormFilter(HIGHPASS_A, HIGHPASS_B)


def butterworth_lowpass() -> DirectFormFilter:
    """A fresh 4th-order Butterworth low pass (48 kHz, 1 kHz)."""
    return DirectFormFilter(LOWPASS_A, LOWPASS_B)