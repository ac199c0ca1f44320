import pytest

from skygame.files import load_entire_file


def test_text_round_trip(tmp_path):
    path = tmp_path / "data.txt"
    content = "v 1.0 2.0 3.0\nf 1/1/1 2/2/2 3/3/3\n"
    path.write_text(content, encoding="utf-8")
    assert load_entire_file(str(path), "r") == content


def test_binary_round_trip(tmp_path):
    path = tmp_path / "image.bmp"
    payload = bytes(range(256))
    path.write_bytes(payload)
    result = load_entire_file(path, "rb")
    assert result == payload
    assert len(result) == 256


def test_empty_file(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")
    assert load_entire_file(path, "r") == ""
    assert load_entire_file(path, "rb") == b""


def test_missing_file_raises(tmp_path):
    missing = tmp_path / "nope.json"
    with pytest.raises(FileNotFoundError) as info:
        load_entire_file(missing, "r")
    assert "does not exist" in str(info.value)
    assert info.value.filename == str(missing)


@pytest.mark.parametrize("mode", ["w", "a", "r+", "wb", "x"])
def test_write_modes_rejected(tmp_path, mode):
    path = tmp_path / "f.txt"
    path.write_text("keep", encoding="utf-8")
    with pytest.raises(ValueError):
        load_entire_file(path, mode)
    assert path.read_text(encoding="utf-8") == "keep"