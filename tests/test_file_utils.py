# tests/test_file_utils.py
from pathlib import Path
import pytest
from mcart import file_utils


def test_list_input_files_sorted_and_skips_directories(tmp_path):
    for name in ["b.png", "a.jpg", "notes.txt"]:
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "nested").mkdir()

    files = file_utils.list_input_files(tmp_path)

    assert [p.name for p in files] == ["a.jpg", "b.png", "notes.txt"]


def test_list_input_files_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        file_utils.list_input_files(tmp_path / "missing")


def test_claim_output_path_disambiguates_same_stem(tmp_path):
    claimed = set()
    first = file_utils.claim_output_path(Path("in/a.jpg"), tmp_path, claimed)
    second = file_utils.claim_output_path(Path("in/a.png"), tmp_path, claimed)
    third = file_utils.claim_output_path(Path("other/a.png"), tmp_path, claimed)

    assert first == tmp_path / "a.html"
    assert second == tmp_path / "a.png.html"
    assert third == tmp_path / "a.png-2.html"
    assert claimed == {first, second, third}


def test_claim_output_path_keeps_plain_name_when_free(tmp_path):
    claimed = {tmp_path / "b.html"}
    assert file_utils.claim_output_path("photo.jpeg", tmp_path, claimed) == tmp_path / "photo.html"


def test_output_path_for_replaces_extension(tmp_path):
    assert file_utils.output_path_for("in/photo.jpeg", tmp_path) == tmp_path / "photo.html"
    assert file_utils.output_path_for(Path("my.pic.png"), tmp_path) == tmp_path / "my.pic.html"


def test_ensure_output_dir_creates_nested(tmp_path):
    out = file_utils.ensure_output_dir(tmp_path / "a" / "b")
    assert out.is_dir()
    assert file_utils.ensure_output_dir(out) == out


def test_clean_metadata_keys():
    cleaned = file_utils.clean_metadata({"User Note": "Test run", "Extra_Key": 3, "1st": "x", "a/b": "y"})
    assert cleaned == {"User_Note": "Test run", "Extra_Key": "3", "mcart_1st": "x", "ab": "y"}
    assert file_utils.clean_metadata(None) == {}


def test_save_html_creates_parent_directories(tmp_path):
    out = tmp_path / "deep" / "dir" / "guide.html"
    result = file_utils.save_html("<!DOCTYPE html>\n<html></html>\n", out)
    assert result == out
    assert out.read_text(encoding="utf-8") == "<!DOCTYPE html>\n<html></html>\n"
