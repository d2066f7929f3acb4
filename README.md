# wavfilter

wavfilter runs PCM WAV files through an IIR filter made of cascaded second-order sections (biquads). Each channel is filtered on its own, one sample at a time, and has its own filter state.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Command line

```
wavfilter input.wav output.wav
```

The command reads `input.wav` and filters every channel through the built-in two-stage cascade (`DEFAULT_COEFFICIENTS` in `wavfilter.cli`). It then writes the result to `output.wav`. The output header is copied from the input, except that the data size, byte rate and block align are each rounded down to a multiple of the channel count.

How samples are handled:

- Each sample is read as a signed little-endian integer with 8 to 32 bits, and at most 8 channels are allowed.
- Each sample is scaled to the range [-1.0, 1.0) before filtering.
- After filtering, the result is truncated (not rounded) back to the input's sample width. Values outside the range are clipped to the 32-bit range before the shift.
- Frames are handled in blocks of 16. When the number of frames is an exact multiple of 16, the last block of 16 frames is neither read nor written.

The command returns exit status 1 and prints a message on standard error in these cases:

- a file cannot be opened
- the header is not a usable PCM WAV header
- the format is not supported
- the sample data ends early

## Library use

### Filtering a whole file

```python
from wavfilter.cli import filter_file

coefficients = [
    [1.5552e-05, 3.1104e-05, 1.5552e-05, 1.0, -1.7695, 0.7848],
    [1.0, 2.0, 1.0, 1.0, -1.8886, 0.9049],
]
header = filter_file("speech.wav", "speech_filtered.wav", coefficients)
```

`filter_file(input_path, output_path, coefficients=DEFAULT_COEFFICIENTS)` filters one file into another. `filter_stream(source, destination, coefficients=DEFAULT_COEFFICIENTS)` does the same job on binary file objects that are already open. Both return the `WavHeader` that was written.

Coefficients are given one row per stage, as `(a0, a1, a2, b0, b1, b2)`. The `a` terms weight the input and the `b` terms weight the output. `b0` is taken to be 1 and is ignored.

Errors raised:

- `ValueError` for more than 8 channels or an unsupported sample width.
- `EOFError` when the sample data ends early.
- `WavHeaderError` for a bad header.

### Biquads

```python
from wavfilter.iir import Biquad, BiquadCascade

section = Biquad([0.2, 0.4, 0.2, 1.0, -0.5, 0.1])
y = section.process(1.0)

cascade = BiquadCascade(coefficients)
out = [cascade.process(x) for x in samples]
print(cascade.stages)
cascade.reset()
```

`Biquad` is one stateful second-order section. `BiquadCascade` chains sections, and each stage takes the previous stage's output as its input. Both have `reset()`, which clears their history. In a cascade, the output sum is not cleared between stages: each stage adds its terms to the running output of the stage before it.

There are also two stateless functions. `second_order_iir(sample, coefficients, x_history, y_history)` works on a single section. `nth_order_iir(sample, coefficients, x_history, y_history)` works on a cascade. Each history is a pair `(n-1, n-2)`, with one pair per stage for a cascade. The functions do not change their arguments. They return `(output, new_x_history, new_y_history)`. A wrong number of coefficients or history values raises `ValueError`.

### Fourth-order Butterworth filters

`wavfilter.directform.DirectFormFilter(a_coefficients, b_coefficients)` is an N-th order direct-form I filter. It has `process(sample)`, `reset()` and an `order` property. Two ready-made designs for 48 kHz audio are included:

- `butterworth_highpass()` has a 500 Hz cut-off.
- `butterworth_lowpass()` has a 1 kHz cut-off.

Each call returns a new filter with empty history.

```python
from wavfilter.directform import butterworth_lowpass

lpf = butterworth_lowpass()
y = lpf.process(0.25)
```

### WAV headers

```python
from wavfilter.wavheader import WavHeader

with open("speech.wav", "rb") as f:
    header = WavHeader.read(f)
print(header.fmt.num_channels, header.fmt.sample_rate, header.header_size)
```

`WavHeader.read(stream)` reads the RIFF chunk, the `fmt ` chunk (including any extra format bytes) and the `data` chunk header. It leaves the stream at the first sample byte.

It raises `WavHeaderError` (a `ValueError`) in these cases:

- the stream is not RIFF/WAVE
- the `fmt ` chunk is missing
- the format is not PCM
- a required format field is zero
- the `data` chunk does not follow directly
- the data size is zero
- the stream ends inside the header

`WavHeader.to_bytes()` serialises a header. `WavHeader.write(stream)` writes the header and flushes the stream. The chunks are the dataclasses `RiffChunk`, `FmtChunk` and `DataChunk`.

## What it does not do

- The command always uses the built-in coefficients; it has no option to choose other ones. Use `filter_file` for that.
- No filter design: coefficients must be supplied.
- Only PCM is read. There is no floating-point WAV support.
- WAV files with other chunks between `fmt ` and `data` are not read.