"""Second-order IIR sections and cascades of them.

Coefficients of one section are laid out as ``(a0, a1, a2, b0, b1, b2)``,
where the ``a`` terms weight the input and the ``b`` terms the output.
``b0`` is assumed to be 1 and is not used.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

Pair = tuple[float, float]
Coefficients = tuple[float, float, float, float, float, float]

_ZERO: Pair = (0.0, 0.0)


def _check_coefficients(coefficients: Iterable[float]) -> Coefficients:
    values = tuple(float(c) for c in coefficients)
    if len(values) != 6:
        raise ValueError(
            f"a second-order section needs 6 coefficients, got {len(values)}"
        )
    return values  # type: ignore[return-value]


def _check_pair(history: Iterable[float], name: str) -> Pair:
    values = tuple(float(v) for v in history)
    if len(values) != 2:
        raise ValueError(f"{name} must hold 2 values, got {len(values)}")
    return values  # type: ignore[return-value]


def _section(
    accumulator: float,
    sample: float,
    coefficients: Coefficients,
    x_history: Pair,
    y_history: Pair,
) -> tuple[float, Pair, Pair]:
    a0, a1, a2, _b0, b1, b2 = coefficients
    output = accumulator
    output += a0 * sample
    output += a1 * x_history[0]
    output += a2 * x_history[1]
    output -= b1 * y_history[0]
    output -= b2 * y_history[1]
    return output, (sample, x_history[0]), (output, y_history[0])


def second_order_iir(
    sample: float,
    coefficients: Sequence[float],
    x_history: Sequence[float],
    y_history: Sequence[float],
) -> tuple[float, Pair, Pair]:
    """Run one sample through a second-order section.

    ``x_history`` and ``y_history`` hold ``(n-1, n-2)`` values.
    Returns ``(output, new_x_history, new_y_history)``.
    """
    return _section(
        0.0,
        float(sample),
        _check_coefficients(coefficients),
        _check_pair(x_history, "x_history"),
        _check_pair(y_history, "y_history"),
    )


def nth_order_iir(
    sample: float,
    coefficients: Sequence[Sequence[float]],
    x_history: Sequence[Sequence[float]],
    y_history: Sequence[Sequence[float]],
) -> tuple[float, tuple[Pair, ...], tuple[Pair, ...]]:
    """Run one sample through a cascade of second-order sections.

    Each stage takes the previous stage's output as its input. The output
    accumulator is carried from one stage into the next rather than being
    cleared per stage. Returns ``(output, new_x_history, new_y_history)``.
    """
    stages = [_check_coefficients(c) for c in coefficients]
    xs = [_check_pair(h, "x_history entry") for h in x_history]
    ys = [_check_pair(h, "y_history entry") for h in y_history]
    if not len(stages) == len(xs) == len(ys):
        raise ValueError(
            "coefficients, x_history and y_history must have one entry per stage"
        )

    output = 0.0
    value = float(sample)
    new_x: list[Pair] = []
    new_y: list[Pair] = []
    for stage, xh, yh in zip(stages, xs, ys):
        output, xh, yh = _section(output, value, stage, xh, yh)
        new_x.append(xh)
        new_y.append(yh)
        value = output
    return output, tuple(new_x), tuple(new_y)


class Biquad:
    """A stateful second-order IIR section."""

    def __init__(self, coefficients: Sequence[float]) -> None:
        self.coefficients = _check_coefficients(coefficients)
        self.reset()

    def reset(self) -> None:
        """Clear the input and output history."""
        self.x_history: Pair = _ZERO
        self.y_history: Pair = _ZERO

    def process(self, sample: float) -> float:
        """Filter one sample and return the output sample."""
        output, self.x_history, self.y_history = _section(
            0.0, float(sample), self.coefficients, self.x_history, self.y_history
        )
        return output


class BiquadCascade:
    """A stateful cascade of second-order IIR sections."""

    def __init__(self, coefficients: Sequence[Sequence[float]]) -> None:
        self.coefficients = tuple(_check_coefficients(c) for c in coefficients)
        self.reset()

    @property
    def stages(self) -> int:
        """Number of second-order sections."""
        return len(self.coefficients)

    def reset(self) -> None:
        """Clear the history of every stage."""
        self.x_history: tuple[Pair, ...] = (_ZERO,) * self.stages
        self.y_history: tuple[Pair, ...] = (_ZERO,) * self.stages

    def process(self, sample: float) -> float:
        """Filter one sample through all stages and return the output."""
        output, self.x_history, self.y_history = nth_order_iir(
            sample, self.coefficients, self.x_history, self.y_history
        )
        return output