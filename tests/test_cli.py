from pathlib import Path

from click.testing import CliRunner
from PIL import Image

from pokerboard.cli import cli
from pokerboard.imgur import ImgurClient


def _run(*args):
    return CliRunner().invoke(cli, list(args))


def test_compose_flop_prints_path(isolated_env, resources_dir, output_dir):
    result = _run("compose", "2h", "9s", "Kd",
                  "--resources-dir", str(resources_dir), "--output-dir", str(output_dir))

    assert result.exit_code == 0, result.output
    assert result.output.strip() == str(output_dir / "flop.jpeg")
    with Image.open(output_dir / "flop.jpeg") as img:
        assert img.size == (330, 140)


def test_compose_invalid_count_exits_1(isolated_env, resources_dir, output_dir):
    result = _run("compose", "2h", "9s",
                  "--resources-dir", str(resources_dir), "--output-dir", str(output_dir))

    assert result.exit_code == 1
    assert "Expected 3, 4 or 5 cards, got 2" in result.output


def test_compose_and_upload(isolated_env, resources_dir, output_dir, monkeypatch):
    uploaded = []

    def fake_upload(self, data, title=None):
        uploaded.append(data)
        return "https://i.imgur.com/board.jpg"

    monkeypatch.setenv("IMGUR_CLIENT_ID", "cid")
    monkeypatch.setattr(ImgurClient, "upload_image", fake_upload)

    result = _run("compose", "2h", "9s", "Kd", "--upload",
                  "--resources-dir", str(resources_dir), "--output-dir", str(output_dir))

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "https://i.imgur.com/board.jpg"
    assert uploaded == [(output_dir / "flop.jpeg").read_bytes()]


def test_upload_without_client_id_fails(isolated_env, tmp_path):
    image = tmp_path / "board.jpeg"
    Image.new("RGB", (10, 10)).save(image, "JPEG")

    result = _run("upload", str(image))

    assert result.exit_code == 1
    assert "IMGUR_CLIENT_ID" in result.output


def test_placeholders_renders_full_deck(isolated_env, tmp_path):
    target = tmp_path / "deck"

    result = _run("placeholders", "--resources-dir", str(target), "--width", "60", "--height", "84")

    assert result.exit_code == 0, result.output
    assert len(list(target.glob("*.jpeg"))) == 52
    with Image.open(target / "Ah.jpeg") as img:
        assert img.size == (60, 84)


def test_config_file_error_is_reported(isolated_env):
    config = isolated_env / "bad.yml"
    config.write_text("jpeg_quality: 500\n", encoding="utf-8")

    result = _run("--config", str(config), "compose", "2h", "9s", "Kd")

    assert result.exit_code == 1
    assert "jpeg_quality" in result.output


def test_broken_config_file_is_reported(isolated_env):
    config = isolated_env / "broken.yml"
    config.write_text("output_dir: [unclosed\n", encoding="utf-8")

    result = _run("--config", str(config), "compose", "2h", "9s", "Kd")

    assert result.exit_code == 1
    assert "invalid YAML" in result.output


def test_upload_read_failure_exits_1(isolated_env, tmp_path, monkeypatch):
    image = tmp_path / "board.jpeg"
    Image.new("RGB", (10, 10)).save(image, "JPEG")

    def unreadable(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setenv("IMGUR_CLIENT_ID", "cid")
    monkeypatch.setattr(Path, "read_bytes", unreadable)

    result = _run("upload", str(image))

    assert result.exit_code == 1
    assert "Permission denied" in result.output
