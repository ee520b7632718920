"""Blob Naming — verifies filename normalization for stored uploads."""

from folio.core.blob_naming import FALLBACK_NAME, blob_filename, normalize_filename


def test_whitespace_runs_become_single_dash():
    assert normalize_filename("my  holiday\tphoto.png") == "my-holiday-photo.png"


def test_directory_components_are_stripped():
    assert normalize_filename("../../etc/passwd") == "passwd"
    assert normalize_filename("C:\\Users\\me\\cv.pdf") == "cv.pdf"


def test_empty_names_fall_back():
    assert normalize_filename("") == FALLBACK_NAME
    assert normalize_filename(None) == FALLBACK_NAME
    assert normalize_filename("..") == FALLBACK_NAME
    assert normalize_filename("   ") == FALLBACK_NAME


def test_blob_filename_prefixes_marker():
    assert blob_filename("a b.jpg", 1700000000000) == "1700000000000-a-b.jpg"
