"""End-to-end tests for the command-line entry point."""

import csv
import json

from geotag_report.cli import EXIT_CONFIG, EXIT_OK, EXIT_TRAVERSAL, main


def test_writes_both_reports(photo_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--path", str(photo_tree)]) == EXIT_OK

    with open(tmp_path / "exif-data.csv", newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert rows[0] == ["File Path", "Latitude", "Longitude"]
    assert [r[0] for r in rows[1:]] == [str(photo_tree / "a.jpg"), str(photo_tree / "trip" / "b.jpeg")]
    assert (tmp_path / "exif-data.html").exists()


def test_default_root_is_images(photo_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--csv"]) == EXIT_OK
    text = (tmp_path / "exif-data.csv").read_text(encoding="utf-8")
    assert "a.jpg" in text
    assert not (tmp_path / "exif-data.html").exists()


def test_html_flag_only(photo_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--path", str(photo_tree), "--html"]) == EXIT_OK
    assert (tmp_path / "exif-data.html").exists()
    assert not (tmp_path / "exif-data.csv").exists()


def test_missing_root_writes_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["--path", str(tmp_path / "missing")]) == EXIT_TRAVERSAL
    assert not (tmp_path / "exif-data.csv").exists()
    assert not (tmp_path / "exif-data.html").exists()


def test_output_dir_and_extensions(photo_tree, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    assert main(["--path", str(photo_tree), "--output-dir", str(out), "--ext", ".JPG", "--csv"]) == EXIT_OK
    with open(out / "exif-data.csv", newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    assert [r[0] for r in rows[1:]] == [str(photo_tree / "upper.JPG")]


def test_config_file(photo_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "geotag.json"
    config.write_text(json.dumps({"path": str(photo_tree), "csv_name": "gps.csv"}), encoding="utf-8")
    assert main(["--config", str(config), "--csv"]) == EXIT_OK
    assert (tmp_path / "gps.csv").exists()


def test_bad_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "geotag.json"
    config.write_text("{broken", encoding="utf-8")
    assert main(["--config", str(config)]) == EXIT_CONFIG
    assert not (tmp_path / "exif-data.csv").exists()


def test_unknown_log_level_in_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "geotag.json"
    config.write_text(json.dumps({"log_level": "verbose"}), encoding="utf-8")
    assert main(["--config", str(config)]) == EXIT_CONFIG
