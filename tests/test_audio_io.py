import wave

import numpy as np
import pytest

from conftest import int_to_pcm, pack_wav
from wavescope.audio_io import DecodedAudio, pcm_to_int, read_wav
from wavescope.errors import DecodeError, DegenerateInputError


@pytest.mark.parametrize("width", [1, 2, 3, 4])
def test_read_wav_round_trips_each_width(write_wav, width):
    bits = width * 8
    lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    samples = np.array([0, 1, -1, lo, hi, 12, -34], dtype=np.int64)
    audio = read_wav(write_wav(samples, sample_width=width))
    assert audio.bit_depth == bits
    assert audio.samples.dtype == np.int32
    assert audio.samples.tolist() == samples.tolist()


def test_stereo_is_interleaved(write_wav):
    audio = read_wav(write_wav([1, -1, 2, -2, 3, -3], channels=2, sample_rate=4))
    assert audio.channels == 2
    assert audio.samples.tolist() == [1, -1, 2, -2, 3, -3]
    assert audio.frame_count == 3
    assert audio.duration == pytest.approx(0.75)


def test_header_matches_stdlib_reader(tmp_path):
    path = tmp_path / "a.wav"
    path.write_bytes(pack_wav(int_to_pcm([5, 6, 7], 2), 22050, 1, 2))
    with wave.open(str(path), "rb") as wf:
        assert wf.getframerate() == 22050
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getnframes() == 3


def test_float_frames_shape_and_scale():
    audio = DecodedAudio(samples=np.array([32767, -32768, 0, 16384], dtype=np.int32),
                         bit_depth=16, sample_rate=2, channels=2)
    frames = audio.as_float_frames()
    assert frames.shape == (2, 2)
    assert frames.dtype == np.float32
    assert frames[0, 1] == pytest.approx(-1.0)
    assert frames[1, 1] == pytest.approx(0.5)


def test_eight_bit_is_recentred():
    assert pcm_to_int(bytes([0, 128, 255]), 1).tolist() == [-128, 0, 127]


def test_missing_file_is_decode_error(tmp_path):
    with pytest.raises(DecodeError):
        read_wav(tmp_path / "nope.wav")


def test_garbage_is_decode_error(tmp_path):
    path = tmp_path / "junk.wav"
    path.write_bytes(b"this is not a wav file at all")
    with pytest.raises(DecodeError):
        read_wav(path)


def test_truncated_data_is_decode_error(tmp_path):
    full = pack_wav(int_to_pcm(np.arange(100), 2), 8000)
    path = tmp_path / "cut.wav"
    path.write_bytes(full[:-51])
    with pytest.raises(DecodeError):
        read_wav(path)


def test_empty_data_is_degenerate(write_wav):
    with pytest.raises(DegenerateInputError):
        read_wav(write_wav([]))
