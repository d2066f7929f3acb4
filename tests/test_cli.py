import io
import struct
import wave

import pytest

from wavfilter.cli import DEFAULT_COEFFICIENTS, filter_file, filter_stream, main
from wavfilter.wavheader import WavHeaderError

IDENTITY = [(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)]


def make_wav(frames, channels=1, sampwidth=2, rate=48000):
    buf = io.BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(channels)
        w.setsampwidth(sampwidth)
        w.setframerate(rate)
        w.writeframes(frames)
    return buf.getvalue()


def pack16(samples):
    return struct.pack(f"<{len(samples)}h", *samples)


def run(data, coefficients=DEFAULT_COEFFICIENTS):
    out = io.BytesIO()
    header = filter_stream(io.BytesIO(data), out, coefficients)
    return header, out.getvalue()


def test_identity_filter_reproduces_samples():
    samples = [0, 1, -1, 1000, -1000, 32767, -32768] + list(range(13))
    data = make_wav(pack16(samples))
    _, out = run(data, IDENTITY)
    assert out == data


def test_header_is_copied():
    data = make_wav(pack16(list(range(20))))
    header, out = run(data)
    assert out[:44] == data[:44]
    assert header.header_size == 44
    assert header.data.chunk_size == 40


def test_exact_block_multiple_drops_last_block():
    samples = list(range(32))
    data = make_wav(pack16(samples))
    _, out = run(data, IDENTITY)
    assert out[:44] == data[:44]
    assert out[44:] == pack16(samples[:16])


def test_zero_input_gives_zero_output():
    data = make_wav(pack16([0] * 21))
    _, out = run(data)
    assert out[44:] == pack16([0] * 21)


def test_two_identity_stages_carry_accumulator():
    samples = [1, -2, 100, 0, 5]
    data = make_wav(pack16(samples))
    _, out = run(data, IDENTITY * 2)
    assert out[44:] == pack16([2 * s for s in samples])


def test_output_is_clipped():
    data = make_wav(pack16([30000, -30000, 3]))
    _, out = run(data, [(2.0, 0.0, 0.0, 1.0, 0.0, 0.0)])
    assert out[44:] == pack16([32767, -32768, 6])


def test_channels_are_filtered_independently():
    impulse = [20000] + [0] * 18
    mono = make_wav(pack16(impulse))
    stereo_frames = []
    for value in impulse:
        stereo_frames += [0, value]
    stereo = make_wav(pack16(stereo_frames), channels=2)

    _, mono_out = run(mono)
    _, stereo_out = run(stereo)
    left = struct.unpack(f"<{len(impulse) * 2}h", stereo_out[44:])[0::2]
    right = struct.unpack(f"<{len(impulse) * 2}h", stereo_out[44:])[1::2]
    assert all(v == 0 for v in left)
    assert list(right) == list(struct.unpack(f"<{len(impulse)}h", mono_out[44:]))
    assert any(v != 0 for v in right)


def test_24_bit_identity_round_trip():
    values = [0, 1, -1, 8388607, -8388608, 123456, -654321]
    frames = b"".join(v.to_bytes(3, "little", signed=True) for v in values)
    data = make_wav(frames, sampwidth=3)
    _, out = run(data, IDENTITY)
    assert out == data


def test_invalid_header_raises():
    with pytest.raises(WavHeaderError):
        run(b"JUNK" + bytes(60))


def test_truncated_data_raises():
    data = make_wav(pack16(list(range(20))))
    with pytest.raises(EOFError):
        run(data[:-6])


def test_too_many_channels_raises():
    data = make_wav(bytes(9 * 2 * 3), channels=9)
    with pytest.raises(ValueError):
        run(data)


def test_filter_file_matches_stream(tmp_path):
    data = make_wav(pack16([500, -400, 300, 0, 0, 12000, -7]))
    src = tmp_path / "in.wav"
    dst = tmp_path / "out.wav"
    src.write_bytes(data)
    filter_file(str(src), str(dst))
    _, expected = run(data)
    assert dst.read_bytes() == expected


def test_main_writes_readable_wav(tmp_path):
    samples = [1000] * 20
    src = tmp_path / "in.wav"
    dst = tmp_path / "out.wav"
    src.write_bytes(make_wav(pack16(samples)))
    assert main([str(src), str(dst)]) == 0
    with wave.open(str(dst), "rb") as w:
        assert w.getnframes() == 20
        assert w.getframerate() == 48000
        assert w.getnchannels() == 1


def test_main_missing_input_returns_error(tmp_path):
    assert main([str(tmp_path / "missing.wav"), str(tmp_path / "out.wav")]) == 1


def test_main_bad_header_returns_error(tmp_path):
    src = tmp_path / "bad.wav"
    src.write_bytes(b"not a wav file at all" * 4)
    assert main([str(src), str(tmp_path / "out.wav")]) == 1


def test_main_requires_arguments():
    with pytest.raises(SystemExit):
        main([])